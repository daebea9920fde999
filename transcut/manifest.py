"""JSON manifest schema — the contract between CLI/API and engine."""

import json
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class CompileConfig:
    """Padding and merge policy for the compiler, in frames."""

    head_padding: int = 5
    tail_padding: int = 5
    merge_tolerance: int = 2

    def validate(self) -> None:
        for name in ("head_padding", "tail_padding", "merge_tolerance"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{name} must be an integer number of frames, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must not be negative, got {value}")


@dataclass
class ExportConfig:
    """Which documents to write for a compiled cut list."""

    xml: bool = True
    srt: bool = True
    sequence_name: str | None = None


@dataclass
class Manifest:
    """Top-level compile manifest."""

    timeline: Path
    output: Path
    subtitles: Path | None = None
    selection: list[int] | None = None
    selection_file: Path | None = None
    version: str = "1"
    compile: CompileConfig = field(default_factory=CompileConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


def _optional_path(value) -> Path | None:
    return Path(value) if value else None


def load_manifest(path: str | Path) -> Manifest:
    """Load and validate a manifest from a JSON file.

    Relative paths inside the manifest are resolved against its directory.
    """
    path = Path(path)
    data = json.loads(path.read_text())

    if "timeline" not in data or "output" not in data:
        raise ValueError("Manifest must contain 'timeline' and 'output' fields")

    base = path.parent

    def _resolve(p: Path | None) -> Path | None:
        if p is None or p.is_absolute():
            return p
        return base / p

    compile_cfg = CompileConfig(**data["compile"]) if "compile" in data else CompileConfig()
    compile_cfg.validate()
    export_cfg = ExportConfig(**data["export"]) if "export" in data else ExportConfig()

    selection = data.get("selection")
    if selection is not None:
        if not isinstance(selection, list) or not all(
            isinstance(i, int) and not isinstance(i, bool) for i in selection
        ):
            raise ValueError("Manifest 'selection' must be a list of integer segment ids")

    return Manifest(
        version=data.get("version", "1"),
        timeline=_resolve(Path(data["timeline"])),
        output=_resolve(Path(data["output"])),
        subtitles=_resolve(_optional_path(data.get("subtitles"))),
        selection=selection,
        selection_file=_resolve(_optional_path(data.get("selection_file"))),
        compile=compile_cfg,
        export=export_cfg,
    )
