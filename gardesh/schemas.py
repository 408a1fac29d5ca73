"""Data schemas for the Gardesh planner."""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Annotated, Dict, Iterable, List, Literal, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


class PlanType(str, Enum):
    QUICK = "QUICK"
    DAILY = "DAILY"
    TRIP = "TRIP"


class TravelType(str, Enum):
    SOLO = "SOLO"
    COUPLE = "COUPLE"
    FAMILY_WITH_KIDS = "FAMILY_WITH_KIDS"
    FAMILY_ADULTS = "FAMILY_ADULTS"
    FRIENDS = "FRIENDS"


class AvailableTime(str, Enum):
    ONE_TO_TWO_HOURS = "ONE_TO_TWO_HOURS"
    HALF_DAY = "HALF_DAY"
    FULL_DAY = "FULL_DAY"


class TravelStyle(str, Enum):
    RELAXED = "RELAXED"
    BALANCED = "BALANCED"
    ADVENTUROUS = "ADVENTUROUS"


class Budget(str, Enum):
    ECONOMIC = "ECONOMIC"
    MODERATE = "MODERATE"
    LUXURY = "LUXURY"
    ANY = "ANY"


class PriceRange(str, Enum):
    BUDGET = "BUDGET"
    MODERATE = "MODERATE"
    EXPENSIVE = "EXPENSIVE"
    LUXURY = "LUXURY"


class PlaceType(str, Enum):
    NATURE = "NATURE"
    BEACH = "BEACH"
    MOUNTAIN = "MOUNTAIN"
    HISTORICAL = "HISTORICAL"
    CULTURAL = "CULTURAL"
    ENTERTAINMENT = "ENTERTAINMENT"
    FOREST = "FOREST"
    WATERFALL = "WATERFALL"
    PARK = "PARK"
    OTHER = "OTHER"


class SuitableFor(str, Enum):
    SOLO = "SOLO"
    COUPLE = "COUPLE"
    FAMILY = "FAMILY"
    KIDS = "KIDS"
    FRIENDS = "FRIENDS"


class TimeSlot(str, Enum):
    MORNING = "MORNING"
    NOON = "NOON"
    AFTERNOON = "AFTERNOON"
    EVENING = "EVENING"
    NIGHT = "NIGHT"


class PlanItemType(str, Enum):
    RESTAURANT = "RESTAURANT"
    PLACE = "PLACE"


class PlanStatus(str, Enum):
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    DELETED = "DELETED"


class Location(BaseModel):
    """Anchor point a plan is generated around."""

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    address: str = ""

    model_config = ConfigDict(frozen=True)


# --------------------------------------------------------------------------
# Data store rows
# --------------------------------------------------------------------------


class _VenueRecord(BaseModel):
    id: str
    name: str
    address: str = ""
    latitude: float
    longitude: float
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    review_count: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("review_count", "reviewCount", "reviews"),
    )
    category: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("category", "category_name"),
    )
    description: Optional[str] = None
    is_active: bool = True

    model_config = ConfigDict(populate_by_name=True)


class Restaurant(_VenueRecord):
    """Restaurant row as exposed by a venue store."""

    price_range: PriceRange = Field(
        default=PriceRange.MODERATE,
        validation_alias=AliasChoices("price_range", "priceRange"),
    )


class TouristPlace(_VenueRecord):
    """Tourist place row as exposed by a venue store."""

    place_type: PlaceType = Field(
        default=PlaceType.OTHER,
        validation_alias=AliasChoices("place_type", "placeType"),
    )
    suitable_for: List[SuitableFor] = Field(
        default_factory=list,
        validation_alias=AliasChoices("suitable_for", "suitableFor"),
    )
    is_free: bool = Field(default=True, validation_alias=AliasChoices("is_free", "isFree"))
    entry_fee: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("entry_fee", "entryFee"),
    )

    @field_validator("suitable_for", mode="before")
    @classmethod
    def _coerce_tags(cls, value: object) -> object:
        """Postgres arrays may arrive as ``{A,B}`` strings from some drivers."""

        if value is None:
            return []
        if isinstance(value, str):
            stripped = value.strip("{}")
            return [part.strip() for part in stripped.split(",") if part.strip()]
        return value


# --------------------------------------------------------------------------
# Planner values
# --------------------------------------------------------------------------


class _CandidateBase(BaseModel):
    id: str
    name: str
    latitude: float
    longitude: float
    address: str = ""
    rating: float = 0.0
    review_count: int = 0
    distance: float = 0.0
    travel_time: int = 0
    category: Optional[str] = None
    description: Optional[str] = None
    tips: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class RestaurantCandidate(_CandidateBase):
    kind: Literal["restaurant"] = "restaurant"
    price_range: PriceRange = PriceRange.MODERATE


class PlaceCandidate(_CandidateBase):
    kind: Literal["place"] = "place"
    place_type: PlaceType = PlaceType.OTHER
    is_free: bool = True
    entry_fee: Optional[float] = None
    suitable_for: List[SuitableFor] = Field(default_factory=list)


Candidate = Annotated[Union[RestaurantCandidate, PlaceCandidate], Field(discriminator="kind")]


class ScheduledItem(BaseModel):
    """A candidate placed on the clock by the scheduler."""

    venue: Candidate
    order: int = Field(ge=1)
    day_number: Optional[int] = Field(default=None, ge=1)
    time_slot: Optional[TimeSlot] = None
    scheduled_time: Optional[datetime] = None
    duration: int = Field(ge=0)
    travel_time: int = Field(default=0, ge=0)
    distance: float = Field(default=0.0, ge=0.0)

    model_config = ConfigDict(frozen=True)

    @property
    def item_type(self) -> PlanItemType:
        if self.venue.kind == "restaurant":
            return PlanItemType.RESTAURANT
        return PlanItemType.PLACE

    @property
    def restaurant_id(self) -> Optional[str]:
        return self.venue.id if self.venue.kind == "restaurant" else None

    @property
    def place_id(self) -> Optional[str]:
        return self.venue.id if self.venue.kind == "place" else None


# --------------------------------------------------------------------------
# Requests
# --------------------------------------------------------------------------

# Trip bounds keep their time of day so partial days count towards the trip.
Moment = Union[datetime, date]


def parse_moment(value: object) -> object:
    """Turn ISO strings into ``date``/``datetime``; aware timestamps become naive UTC."""

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if "T" not in text:
            return date.fromisoformat(text)
        value = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def calendar_date(value: Optional[Moment]) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    return value


class QuickPlanRequest(BaseModel):
    location: Location
    travel_type: TravelType
    available_time: AvailableTime


class DailyPlanRequest(BaseModel):
    location: Location
    search_radius: float = Field(default=20.0, gt=0)
    travel_type: TravelType
    start_time: time
    end_time: time
    budget: Optional[Budget] = None
    interests: List[str] = Field(default_factory=list)
    plan_date: Optional[date] = None


class TripPlanRequest(BaseModel):
    location: Location
    search_radius: float = Field(default=30.0, gt=0)
    start_date: Moment
    end_date: Moment
    travel_type: TravelType
    travel_style: TravelStyle
    budget: Optional[Budget] = None
    preferences: Dict[str, float] = Field(default_factory=dict)
    interests: List[str] = Field(default_factory=list)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _coerce_bounds(cls, value: object) -> object:
        return parse_moment(value)


class PlanRequest(BaseModel):
    """Raw plan creation payload; per-type requirements are checked later."""

    plan_type: Optional[PlanType] = Field(
        default=None,
        validation_alias=AliasChoices("plan_type", "planType"),
    )
    location: Optional[Location] = None
    search_radius: Optional[float] = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices("search_radius", "searchRadius"),
    )
    travel_type: Optional[TravelType] = Field(
        default=None,
        validation_alias=AliasChoices("travel_type", "travelType"),
    )
    available_time: Optional[AvailableTime] = Field(
        default=None,
        validation_alias=AliasChoices("available_time", "availableTime"),
    )
    travel_style: Optional[TravelStyle] = Field(
        default=None,
        validation_alias=AliasChoices("travel_style", "travelStyle"),
    )
    start_date: Optional[Moment] = Field(
        default=None,
        validation_alias=AliasChoices("start_date", "startDate"),
    )
    end_date: Optional[Moment] = Field(
        default=None,
        validation_alias=AliasChoices("end_date", "endDate"),
    )
    start_time: Optional[time] = Field(
        default=None,
        validation_alias=AliasChoices("start_time", "startTime"),
    )
    end_time: Optional[time] = Field(
        default=None,
        validation_alias=AliasChoices("end_time", "endTime"),
    )
    budget: Optional[Budget] = None
    interests: List[str] = Field(default_factory=list)
    preferences: Dict[str, float] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _coerce_date(cls, value: object) -> object:
        return parse_moment(value)

    @field_validator("start_time", "end_time", "budget", "travel_style", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("interests", mode="before")
    @classmethod
    def _coerce_interests(cls, value: object) -> object:
        if value is None:
            return []
        return value

    @field_validator("preferences", mode="before")
    @classmethod
    def _coerce_preferences(cls, value: object) -> object:
        if value is None:
            return {}
        return value


# --------------------------------------------------------------------------
# Persisted plans
# --------------------------------------------------------------------------


class TravelPlanItem(BaseModel):
    """A persisted stop inside a travel plan."""

    id: str
    plan_id: str
    order: int = Field(ge=1)
    day_number: Optional[int] = None
    time_slot: Optional[TimeSlot] = None
    scheduled_time: Optional[datetime] = None
    duration: int = 60
    item_type: PlanItemType
    restaurant_id: Optional[str] = None
    place_id: Optional[str] = None
    travel_duration: Optional[int] = None
    distance: Optional[float] = None
    notes: Optional[str] = None
    tips: Optional[str] = None
    is_completed: bool = False
    restaurant: Optional[Restaurant] = None
    place: Optional[TouristPlace] = None

    @model_validator(mode="after")
    def _check_single_venue(self) -> "TravelPlanItem":
        if bool(self.restaurant_id) == bool(self.place_id):
            raise ValueError("Exactly one of restaurant_id or place_id must be set")
        expected = PlanItemType.RESTAURANT if self.restaurant_id else PlanItemType.PLACE
        if self.item_type != expected:
            raise ValueError(
                f"item_type {self.item_type.value} does not match the referenced venue"
            )
        return self

    @property
    def venue_name(self) -> Optional[str]:
        if self.restaurant is not None:
            return self.restaurant.name
        if self.place is not None:
            return self.place.name
        return None


class TravelPlan(BaseModel):
    """Persisted plan header with its items."""

    id: str
    user_id: str
    plan_type: PlanType
    title: Optional[str] = None
    description: Optional[str] = None
    latitude: float
    longitude: float
    address: str = ""
    search_radius: float = 5.0
    travel_type: Optional[TravelType] = None
    available_time: Optional[AvailableTime] = None
    travel_style: Optional[TravelStyle] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    budget: Optional[Budget] = None
    interests: Optional[List[str]] = None
    preferences: Optional[Dict[str, float]] = None
    status: PlanStatus = PlanStatus.DRAFT
    is_shared: bool = False
    total_distance: Optional[float] = None
    total_duration: Optional[int] = None
    estimated_cost: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    item_count: Optional[int] = None
    items: List[TravelPlanItem] = Field(default_factory=list)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _format_time(cls, value: object) -> object:
        if isinstance(value, time):
            return value.strftime("%H:%M")
        return value

    def days(self) -> Dict[Optional[int], List[TravelPlanItem]]:
        """Group items by day number, keeping each day's order."""

        grouped: Dict[Optional[int], List[TravelPlanItem]] = {}
        for item in sorted(self.items, key=_item_sort_key):
            grouped.setdefault(item.day_number, []).append(item)
        return grouped

    def all_items(self) -> Iterable[TravelPlanItem]:
        yield from sorted(self.items, key=_item_sort_key)


def _item_sort_key(item: TravelPlanItem) -> tuple[int, int]:
    return (item.day_number or 0, item.order)


__all__ = [
    "AvailableTime",
    "Budget",
    "Candidate",
    "DailyPlanRequest",
    "Location",
    "Moment",
    "PlaceCandidate",
    "PlaceType",
    "PlanItemType",
    "PlanRequest",
    "PlanStatus",
    "PlanType",
    "PriceRange",
    "QuickPlanRequest",
    "Restaurant",
    "RestaurantCandidate",
    "ScheduledItem",
    "SuitableFor",
    "TimeSlot",
    "TouristPlace",
    "TravelPlan",
    "TravelPlanItem",
    "TravelStyle",
    "TravelType",
    "TripPlanRequest",
    "calendar_date",
    "parse_moment",
]
