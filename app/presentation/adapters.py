"""List adapters turning profile sequences into renderable rows"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, Protocol, TypeVar

from app.models.profile import Profile
from app.utils.datetime_helper import now_millis

PLACEHOLDER_IMAGE = "ic_placeholder_user"


class ImageLoader(Protocol):
    """Caching image loader; fills `target` asynchronously from `url`"""

    def load(self, url: str, target: Any, placeholder: str) -> None:
        ...

    def show_placeholder(self, target: Any, placeholder: str) -> None:
        ...


SelectHandler = Callable[[Profile], None]


@dataclass(frozen=True)
class CardRow:
    """One card of the For You stack"""
    profile: Profile
    name_age: str
    bio: str
    distance: str
    match: str
    image_url: Optional[str]


@dataclass(frozen=True)
class GridRow:
    """One cell of the Discover grid"""
    profile: Profile
    name_age: str
    image_url: Optional[str]
    online: bool


RowT = TypeVar("RowT", CardRow, GridRow)


class ProfileListAdapter(ABC, Generic[RowT]):
    """
    Holds the current profile list and the caller's select handler.
    Subclasses decide what a row looks like.
    """

    def __init__(
        self,
        profiles: Optional[List[Profile]] = None,
        on_select: Optional[SelectHandler] = None,
        image_loader: Optional[ImageLoader] = None,
    ):
        self._profiles: List[Profile] = list(profiles or [])
        self._on_select = on_select
        self._image_loader = image_loader

    def __len__(self) -> int:
        return len(self._profiles)

    @property
    def item_count(self) -> int:
        return len(self._profiles)

    @property
    def profiles(self) -> List[Profile]:
        return list(self._profiles)

    def update_data(self, profiles: List[Profile]) -> None:
        """Replace the whole list"""
        self._profiles = list(profiles)

    def remove_at(self, position: int) -> Optional[Profile]:
        """Drop one item; positions outside the list are ignored"""
        if 0 <= position < len(self._profiles):
            return self._profiles.pop(position)
        return None

    def profile_at(self, position: int) -> Profile:
        return self._profiles[position]

    def row(self, position: int) -> RowT:
        return self._build_row(self._profiles[position])

    @abstractmethod
    def _build_row(self, profile: Profile) -> RowT:
        """View model for one profile"""

    def bind(self, position: int, target: Any) -> RowT:
        """Build the row at `position` and start loading its image into `target`"""
        row = self.row(position)
        if self._image_loader is not None:
            if row.image_url:
                self._image_loader.load(row.image_url, target, PLACEHOLDER_IMAGE)
            else:
                self._image_loader.show_placeholder(target, PLACEHOLDER_IMAGE)
        return row

    def select(self, position: int) -> None:
        if self._on_select is not None:
            self._on_select(self._profiles[position])


def _first_photo(profile: Profile) -> Optional[str]:
    return profile.photo_urls[0] if profile.photo_urls else None


class ProfileCardAdapter(ProfileListAdapter[CardRow]):
    """Cards for the swipe stack: photo, name/age, bio, distance and match"""

    def _build_row(self, profile: Profile) -> CardRow:
        return CardRow(
            profile=profile,
            name_age=profile.name_age,
            bio=profile.bio,
            distance=profile.formatted_distance,
            match=f"{profile.match_percentage}% Match",
            image_url=_first_photo(profile),
        )


class DiscoverGridAdapter(ProfileListAdapter[GridRow]):
    """Two-column grid cells with an online badge"""

    def __init__(
        self,
        profiles: Optional[List[Profile]] = None,
        on_select: Optional[SelectHandler] = None,
        image_loader: Optional[ImageLoader] = None,
        clock: Callable[[], int] = now_millis,
    ):
        super().__init__(profiles, on_select, image_loader)
        self._clock = clock

    def _build_row(self, profile: Profile) -> GridRow:
        return GridRow(
            profile=profile,
            name_age=profile.name_age,
            image_url=_first_photo(profile),
            online=profile.is_recently_active(self._clock()),
        )
