# bookinghub/db/crud_catalog.py
from typing import List, Optional

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookinghub.db.models import Activity, Destination, Package
from bookinghub.schemas.catalog import PackageFilters


async def list_destinations(db: AsyncSession) -> List[Destination]:
    res = await db.execute(select(Destination).order_by(Destination.name.asc()))
    return list(res.scalars().all())


async def get_destination(db: AsyncSession, destination_id: str) -> Optional[Destination]:
    res = await db.execute(select(Destination).where(Destination.id == destination_id))
    return res.scalars().first()


async def list_packages(
    db: AsyncSession,
    filters: Optional[PackageFilters] = None,
) -> List[Package]:
    """
    Every supplied filter must hold (AND); missing filters are ignored.
    """
    stmt = select(Package)
    where_clauses = []

    if filters is not None:
        if filters.price_min is not None:
            where_clauses.append(Package.price >= filters.price_min)
        if filters.price_max is not None:
            where_clauses.append(Package.price <= filters.price_max)
        bounds = filters.duration_bounds()
        if bounds is not None:
            low, high = bounds
            where_clauses.append(Package.duration >= low)
            if high is not None:
                where_clauses.append(Package.duration <= high)
        if filters.type is not None:
            where_clauses.append(Package.type == filters.type)
        if filters.destination_id is not None:
            where_clauses.append(Package.destination_id == filters.destination_id)

    if where_clauses:
        stmt = stmt.where(and_(*where_clauses))

    stmt = stmt.order_by(Package.title.asc())
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def search_packages(db: AsyncSession, query: str) -> List[Package]:
    """
    Case-insensitive substring match on the package text fields and on the
    name/country of its destination.
    """
    escaped = query.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{escaped}%"

    def _like(column):
        return func.lower(column).like(pattern, escape="\\")

    stmt = (
        select(Package)
        .outerjoin(Destination, Destination.id == Package.destination_id)
        .where(
            or_(
                _like(Package.title),
                _like(Package.description),
                _like(Package.type),
                _like(Destination.name),
                _like(Destination.country),
            )
        )
        .order_by(Package.title.asc())
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def get_package(db: AsyncSession, package_id: str) -> Optional[Package]:
    res = await db.execute(select(Package).where(Package.id == package_id))
    return res.scalars().first()


async def list_activities(db: AsyncSession) -> List[Activity]:
    res = await db.execute(select(Activity).order_by(Activity.name.asc()))
    return list(res.scalars().all())


async def count_destinations(db: AsyncSession) -> int:
    return (await db.execute(select(func.count(Destination.id)))).scalar_one()


async def add_catalog(
    db: AsyncSession,
    destinations: List[dict],
    packages: List[dict],
    activities: List[dict],
) -> None:
    db.add_all([Destination(**d) for d in destinations])
    db.add_all([Package(**p) for p in packages])
    db.add_all([Activity(**a) for a in activities])
    await db.commit()
