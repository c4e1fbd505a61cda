from dataclasses import dataclass
from typing import Any, Dict, Tuple

U32_MAX = 2**32 - 1


@dataclass(frozen=True)
class SubsetInfo:
    """
    Caption and pixel size of one image in the training subset.
    """
    caption: str
    resolution: Tuple[int, int]  # (width, height)

    def to_dict(self) -> Dict[str, Any]:
        width, height = self.resolution
        return {"caption": self.caption, "resolution": [width, height]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SubsetInfo":
        if not isinstance(data, dict):
            raise ValueError(f"Expected an object, got {type(data).__name__}")

        caption = data.get("caption")
        if not isinstance(caption, str):
            raise ValueError("'caption' must be a string")

        resolution = data.get("resolution")
        if not isinstance(resolution, (list, tuple)) or len(resolution) != 2:
            raise ValueError("'resolution' must be a [width, height] pair")
        for value in resolution:
            # bool is an int subclass but never a valid dimension
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= U32_MAX:
                raise ValueError(f"Invalid dimension in 'resolution': {value!r}")

        return cls(caption=caption, resolution=(resolution[0], resolution[1]))
