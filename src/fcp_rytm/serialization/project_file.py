"""Project files.

Two on-disk forms are understood:

- ``.rytm``: the whole project tree as JSON (read and write)
- ``.syx`` / ``.sysex``: a raw SysEx dump file, a run of object dump frames.
  Loading applies each frame to a fresh project; :func:`save_object` writes
  the stored dump of a single object as one frame.

The JSON form is produced and checked by pydantic from the model
dataclasses, so a file with missing slots or mistyped fields is refused
when it is loaded.

Usage::

    from fcp_rytm.serialization.project_file import load_project, save_project

    project = load_project("/path/to/set.rytm")
    save_project(project, "/path/to/copy.rytm")
"""

from __future__ import annotations

import logging
from pathlib import Path

import pydantic

from fcp_rytm.errors import CodecError, FramingError, SerializationError
from fcp_rytm.model.project import Project
from fcp_rytm.parser.selector import ObjectTypeSelector
from fcp_rytm.serialization.frame import FrameAssembler
from fcp_rytm.serialization.sysex import ElektronSysexCodec

logger = logging.getLogger(__name__)

FORMAT_NAME = "fcp-rytm-project"
FORMAT_VERSION = 1

PROJECT_SUFFIXES = (".rytm",)
SYSEX_SUFFIXES = (".syx", ".sysex")


class _Header(pydantic.BaseModel):
    format: str
    version: int


class ProjectFile(pydantic.BaseModel):
    """The ``.rytm`` document: a format header around the project tree."""

    model_config = pydantic.ConfigDict(
        ser_json_bytes="base64",
        val_json_bytes="base64",
        validate_default=True,
    )

    format: str = FORMAT_NAME
    version: int = FORMAT_VERSION
    project: Project


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

def project_to_json(project: Project) -> str:
    return ProjectFile(project=project).model_dump_json(indent=1)


def project_from_json(text: str | bytes) -> Project:
    try:
        header = _Header.model_validate_json(text)
    except pydantic.ValidationError as exc:
        raise SerializationError(f"Corrupt project file: {_first_error(exc)}") from exc
    if header.format != FORMAT_NAME:
        raise SerializationError(f"Not an {FORMAT_NAME} file.")
    if header.version != FORMAT_VERSION:
        raise SerializationError(
            f"Unsupported project file version {header.version!r} "
            f"(expected {FORMAT_VERSION})."
        )
    try:
        return ProjectFile.model_validate_json(text).project
    except pydantic.ValidationError as exc:
        raise SerializationError(f"Corrupt project file: {_first_error(exc)}") from exc


def _first_error(exc: pydantic.ValidationError) -> str:
    error = exc.errors()[0]
    where = ".".join(str(part) for part in error["loc"])
    more = exc.error_count() - 1
    suffix = f" (and {more} more)" if more else ""
    return f"{where or 'document'}: {error['msg']}{suffix}"


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

def save_project(project: Project, path: str) -> None:
    target = Path(path).expanduser()
    suffix = target.suffix.lower()
    if suffix in SYSEX_SUFFIXES:
        raise SerializationError(
            f"Cannot save the whole project to {target.name}: a SysEx file holds a single "
            f"object. Use a .rytm file, or export one object, e.g. "
            f"export kit 1 ~/my_kit{suffix}"
        )
    if suffix not in PROJECT_SUFFIXES:
        raise SerializationError(
            f"Cannot save to {target.name}: only {', '.join(PROJECT_SUFFIXES)} files are written."
        )
    target.write_text(project_to_json(project))
    logger.info("Saved project %r to %s", project.title, target)


def save_object(
    project: Project,
    selector: ObjectTypeSelector,
    path: str,
    device_id: int = 0,
) -> Path:
    """Write the stored dump of one object to a SysEx file as a single frame."""
    target = Path(path).expanduser()
    if target.suffix.lower() not in SYSEX_SUFFIXES:
        raise SerializationError(
            f"Cannot export {selector} to {target.name}: "
            f"expected one of {', '.join(SYSEX_SUFFIXES)}."
        )
    if not target.parent.is_dir():
        raise SerializationError(f"No such directory: {target.parent}")
    frame = ElektronSysexCodec().dump_frame(project, selector, device_id)
    target.write_bytes(frame)
    logger.info("Exported %s (%d bytes) to %s", selector, len(frame), target)
    return target


def load_project(path: str) -> Project:
    source = Path(path).expanduser()
    suffix = source.suffix.lower()
    if not source.is_file():
        raise SerializationError(f"No such file: {source}")

    if suffix in PROJECT_SUFFIXES:
        project = project_from_json(source.read_bytes())
    elif suffix in SYSEX_SUFFIXES:
        project = load_sysex_dump(source.read_bytes(), title=source.stem)
    else:
        raise SerializationError(
            f"Unknown file type {suffix or '(none)'}. "
            f"Expected one of {', '.join(PROJECT_SUFFIXES + SYSEX_SUFFIXES)}."
        )
    logger.info("Loaded project %r from %s", project.title, source)
    return project


def load_sysex_dump(data: bytes, title: str = "Untitled") -> Project:
    """Build a project from a run of SysEx dump frames."""
    project = Project.create(title)
    assembler = FrameAssembler()
    codec = ElektronSysexCodec()
    try:
        frames = assembler.feed_many(data)
        for frame in frames:
            codec.apply(project, frame)
    except (FramingError, CodecError) as exc:
        raise SerializationError(f"Invalid SysEx dump file: {exc}") from exc
    if assembler.buffering:
        logger.warning("SysEx dump ends inside a frame; %d bytes ignored", assembler.pending)
    if not frames:
        raise SerializationError("The SysEx dump file holds no complete frames.")
    return project
