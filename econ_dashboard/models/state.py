"""Serializable dashboard UI state."""

from dataclasses import dataclass, replace


VIEW_MODES = ("raw", "indexed")
MAX_SELECTED_INDICATORS = 5


@dataclass(frozen=True)
class DashboardState:
    """
    Everything a recompute depends on besides the data itself.

    date_range holds inclusive positional bounds into the observation
    sequence; None means the full range.
    """

    selected: tuple[str, ...]
    view_mode: str = "raw"
    date_range: tuple[int, int] | None = None
    show_spread: bool = True

    def __post_init__(self) -> None:
        if self.view_mode not in VIEW_MODES:
            raise ValueError(f"Unknown view mode: {self.view_mode}")
        # Accept lists from JSON payloads
        object.__setattr__(self, "selected", tuple(self.selected))
        if self.date_range is not None:
            start, end = self.date_range
            object.__setattr__(self, "date_range", (int(start), int(end)))

    @property
    def is_indexed(self) -> bool:
        return self.view_mode == "indexed"

    def with_view_mode(self, view_mode: str) -> "DashboardState":
        return replace(self, view_mode=view_mode)

    def with_date_range(self, date_range: tuple[int, int] | None) -> "DashboardState":
        return replace(self, date_range=date_range)

    def to_dict(self) -> dict:
        return {
            "selected": list(self.selected),
            "view_mode": self.view_mode,
            "date_range": list(self.date_range) if self.date_range is not None else None,
            "show_spread": self.show_spread,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DashboardState":
        date_range = data.get("date_range")
        return cls(
            selected=tuple(data.get("selected", ())),
            view_mode=data.get("view_mode", "raw"),
            date_range=tuple(date_range) if date_range is not None else None,
            show_spread=bool(data.get("show_spread", True)),
        )
