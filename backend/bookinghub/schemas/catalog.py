# bookinghub/schemas/catalog.py
from typing import Dict, List, Literal, Optional, Tuple

from bookinghub.schemas.base import CamelModel

DurationBucket = Literal["1-3 days", "4-7 days", "1-2 weeks", "2+ weeks"]

# inclusive day ranges; None = open ended
DURATION_BUCKETS: Dict[str, Tuple[int, Optional[int]]] = {
    "1-3 days": (1, 3),
    "4-7 days": (4, 7),
    "1-2 weeks": (8, 14),
    "2+ weeks": (15, None),
}


class DestinationOut(CamelModel):
    id: str
    name: str
    country: str
    description: str
    image_url: str
    package_count: int
    # cents
    price_from: int
    featured: bool = False


class PackageOut(CamelModel):
    id: str
    title: str
    destination_id: str
    description: str
    image_url: str
    # cents
    price: int
    # days
    duration: int
    max_guests: int
    rating: float
    type: str
    features: List[str] = []
    included: List[str] = []
    activities: List[str] = []


class ActivityOut(CamelModel):
    id: str
    name: str
    description: str
    image_url: str
    category: str


class PackageFilters(CamelModel):
    price_min: Optional[int] = None
    price_max: Optional[int] = None
    duration: Optional[DurationBucket] = None
    type: Optional[str] = None
    destination_id: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)

    def duration_bounds(self) -> Optional[Tuple[int, Optional[int]]]:
        if self.duration is None:
            return None
        return DURATION_BUCKETS[self.duration]

    def matches(self, package: PackageOut) -> bool:
        if self.price_min is not None and package.price < self.price_min:
            return False
        if self.price_max is not None and package.price > self.price_max:
            return False
        bounds = self.duration_bounds()
        if bounds is not None:
            low, high = bounds
            if package.duration < low or (high is not None and package.duration > high):
                return False
        if self.type is not None and package.type != self.type:
            return False
        if self.destination_id is not None and package.destination_id != self.destination_id:
            return False
        return True
