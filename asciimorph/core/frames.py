"""Frame model: the joined-string grid, animation sequences and validation."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..utils.grid_ops import BLANK, frame_rows

PLACEHOLDER_WIDTH = 40


def placeholder_frame(message: str = "No frames provided", width: int = PLACEHOLDER_WIDTH) -> str:
    """Bordered diagnostic frame shown when there is nothing valid to play."""
    inner = max(width - 2, len(message) + 2)
    border = "+" + "-" * inner + "+"
    padding = "|" + BLANK * inner + "|"
    content = "| " + message.ljust(inner - 1) + "|"
    return "\n".join([border, padding, content, padding, border])


def frame_size(frame: str) -> Tuple[int, int]:
    rows = frame_rows(frame)
    return (max((len(r) for r in rows), default=0), len(rows))


@dataclass
class FrameStats:
    width: int
    height: int
    character_count: int
    density: float


@dataclass
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    stats: Optional[FrameStats] = None


def validate_frame(frame: Any, width: Optional[int] = None, height: Optional[int] = None) -> ValidationResult:
    """Check the grid invariant (equal row lengths, optional exact size)."""
    if not isinstance(frame, str):
        return ValidationResult(False, errors=[f"frame must be a string, got {type(frame).__name__}"])
    if not frame:
        return ValidationResult(False, errors=["frame is empty"])

    rows = frame_rows(frame)
    errors: List[str] = []
    warnings: List[str] = []
    lengths = {len(r) for r in rows}
    w, h = max(lengths), len(rows)
    if len(lengths) > 1:
        errors.append(f"ragged rows: lengths {sorted(lengths)}")
    if width is not None and w != width:
        errors.append(f"width {w} != expected {width}")
    if height is not None and h != height:
        errors.append(f"height {h} != expected {height}")

    drawn = sum(1 for r in rows for ch in r if ch != BLANK)
    cells = sum(len(r) for r in rows)
    if drawn == 0:
        warnings.append("frame contains only background")
    stats = FrameStats(w, h, drawn, drawn / cells if cells else 0.0)
    return ValidationResult(not errors, errors, warnings, stats)


def validate_frames(frames: Any) -> bool:
    if not isinstance(frames, (list, tuple)) or not frames:
        return False
    return all(isinstance(f, str) and len(f) > 0 for f in frames)


@dataclass(frozen=True)
class AnimationMetadata:
    name: str
    fps: float
    duration: float  # ms
    style: str
    generator: Optional[str] = None
    model: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "fps": self.fps,
            "duration": self.duration,
            "style": self.style,
            "generator": self.generator,
            "model": self.model,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnimationMetadata":
        created = data.get("createdAt")
        return cls(
            name=str(data.get("name", "untitled")),
            fps=float(data.get("fps", 10)),
            duration=float(data.get("duration", 0)),
            style=str(data.get("style", "morph")),
            generator=data.get("generator"),
            model=data.get("model"),
            created_at=datetime.fromisoformat(created) if created else datetime.now(timezone.utc),
        )


@dataclass(frozen=True)
class AnimationSequence:
    frames: Tuple[str, ...]
    metadata: AnimationMetadata

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self):
        return iter(self.frames)

    def __getitem__(self, index: int) -> str:
        return self.frames[index]

    @classmethod
    def build(
        cls,
        frames: Iterable[str],
        name: str,
        style: str,
        fps: float = 10.0,
        generator: Optional[str] = None,
        model: Optional[str] = None,
    ) -> "AnimationSequence":
        frames = tuple(frames)
        fps = fps if fps > 0 else 10.0
        meta = AnimationMetadata(
            name=name,
            fps=fps,
            duration=len(frames) * 1000.0 / fps,
            style=style,
            generator=generator,
            model=model,
        )
        return cls(frames, meta)

    def to_dict(self) -> Dict[str, Any]:
        return {"frames": list(self.frames), "metadata": self.metadata.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnimationSequence":
        frames: Sequence[str] = data.get("frames") or ()
        return cls(tuple(str(f) for f in frames), AnimationMetadata.from_dict(data.get("metadata") or {}))
