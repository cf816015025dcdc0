# bookinghub/api/routers/packages.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from bookinghub.api.dependencies import get_vacation_storage
from bookinghub.schemas.catalog import DurationBucket, PackageFilters, PackageOut
from bookinghub.storage.base import VacationStorage

router = APIRouter()


def package_filters(
    price_min: Optional[int] = Query(None, alias="priceMin", ge=0),
    price_max: Optional[int] = Query(None, alias="priceMax", ge=0),
    duration: Optional[DurationBucket] = Query(None),
    type: Optional[str] = Query(None),
    destination_id: Optional[str] = Query(None, alias="destinationId"),
) -> PackageFilters:
    return PackageFilters(
        price_min=price_min,
        price_max=price_max,
        duration=duration,
        type=type,
        destination_id=destination_id,
    )


@router.get("/packages", response_model=List[PackageOut])
async def list_packages(
    filters: PackageFilters = Depends(package_filters),
    storage: VacationStorage = Depends(get_vacation_storage),
):
    return await storage.list_packages(None if filters.is_empty() else filters)


# must stay above /packages/{package_id}
@router.get("/packages/search", response_model=List[PackageOut])
async def search_packages(
    q: Optional[str] = Query(None),
    storage: VacationStorage = Depends(get_vacation_storage),
):
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="Search query is required")
    return await storage.search_packages(q)


@router.get("/packages/{package_id}", response_model=PackageOut)
async def get_package(
    package_id: str,
    storage: VacationStorage = Depends(get_vacation_storage),
):
    package = await storage.get_package(package_id)
    if not package:
        raise HTTPException(status_code=404, detail="Package not found")
    return package
