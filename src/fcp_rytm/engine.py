"""Command engine: the project tree behind one lock.

Parsing is pure and runs outside the lock. Dispatch, dump application and
undo restores all run inside it; a request that cannot get the lock within
``config.lock_timeout`` seconds fails with :class:`BusyError`.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator

from fcp_rytm.config import RytmConfig
from fcp_rytm.errors import BusyError, InvalidExportFormat, RytmError
from fcp_rytm.model.event_log import DumpApplied, SnapshotEvent, snapshot
from fcp_rytm.model.project import Project, RytmObject
from fcp_rytm.parser.command import SET, parse_command, parse_command_type
from fcp_rytm.parser.selector import ObjectTypeSelector, resolve_values
from fcp_rytm.parser.value import ValueList, render
from fcp_rytm.serialization.frame import FrameAssembler
from fcp_rytm.serialization.project_file import save_object
from fcp_rytm.serialization.sysex import ElektronSysexCodec, prepare_query, prepare_sysex
from fcp_rytm.server.dispatch import dispatch
from fcp_rytm.server.reply import Reply

logger = logging.getLogger(__name__)


class RytmEngine:
    """Owns a project, its lock and the incoming SysEx frame assembler."""

    def __init__(self, project: Project | None = None, config: RytmConfig | None = None) -> None:
        self.project = project if project is not None else Project.create()
        self.config = config if config is not None else RytmConfig()
        self._lock = threading.Lock()
        self._frame_lock = threading.Lock()
        self._assembler = FrameAssembler()
        self._codec = ElektronSysexCodec()

    @contextmanager
    def locked(self) -> Iterator[Project]:
        timeout = self.config.lock_timeout
        if not self._lock.acquire(timeout=timeout):
            logger.error("Project lock not acquired within %gs", timeout)
            raise BusyError(timeout)
        try:
            yield self.project
        finally:
            self._lock.release()

    # -- commands --

    def command(self, command_type: str, values: ValueList) -> Reply:
        """Parse and run one get/set command, returning its reply."""
        reply, _ = self.execute(command_type, values)
        return reply

    def execute(
        self, command_type: str, values: ValueList
    ) -> tuple[Reply, SnapshotEvent | None]:
        """Like :meth:`command`, also returning the undo event of a set."""
        try:
            command_type = parse_command_type(command_type)
            tokens = parse_command(values, command_type)
            selector = tokens[0].selector
            with self.locked() as project:
                before = snapshot(project.get(selector)) if command_type == SET else None
                reply = dispatch(project, command_type, tokens)
                after = snapshot(project.get(selector)) if before is not None else None
        except RytmError as exc:
            logger.error("%s %s: %s", command_type, render(values), exc)
            raise

        event = None
        if before is not None:
            event = SnapshotEvent(
                selector=selector,
                before=before,
                after=after,
                summary=f"set {render(values)}",
            )
        return reply, event

    # -- SysEx --

    def handle_sysex_byte(self, byte: int) -> DumpApplied | None:
        """Feed one incoming byte; apply the frame it completes, if any."""
        with self._frame_lock:
            try:
                frame = self._assembler.feed(byte)
            except RytmError as exc:
                logger.error("%s", exc)
                raise
        if frame is None:
            return None
        return self.apply_frame(frame)

    def handle_sysex_bytes(self, data: Iterable[int]) -> list[DumpApplied]:
        events: list[DumpApplied] = []
        for byte in data:
            event = self.handle_sysex_byte(byte)
            if event is not None:
                events.append(event)
        return events

    def apply_frame(self, frame: bytes) -> DumpApplied:
        """Decode a complete frame and store its payload under the lock."""
        try:
            dump = self._codec.decode(frame)
            with self.locked() as project:
                target = project.get(dump.selector)
                before = snapshot(target)
                target.dump = dump.payload
                after = snapshot(target)
        except RytmError as exc:
            logger.error("%s", exc)
            raise
        logger.info("Applied %d byte dump to %s", len(dump.payload), dump.selector)
        return DumpApplied(
            selector=dump.selector,
            before=before,
            after=after,
            summary=f"dump {dump.selector}",
        )

    def prepare_query(self, values: ValueList) -> bytes:
        """Build the dump request frame for a selector."""
        try:
            return prepare_query(values, self.config.device_id)
        except RytmError as exc:
            logger.error("%s", exc)
            raise

    def prepare_sysex(self, values: ValueList) -> bytes:
        """Build the dump frame for the stored dump of the selected object."""
        try:
            with self.locked() as project:
                return prepare_sysex(project, values, self.config.device_id)
        except RytmError as exc:
            logger.error("%s", exc)
            raise

    def export(self, values: ValueList, path: str) -> Path:
        """Write the stored dump of the selected object to a SysEx file."""
        try:
            selector, consumed = resolve_values(values)
            if consumed != len(values):
                raise InvalidExportFormat()
            with self.locked() as project:
                return save_object(project, selector, path, self.config.device_id)
        except RytmError as exc:
            logger.error("%s", exc)
            raise

    @property
    def sysex_pending(self) -> int:
        return self._assembler.pending

    # -- undo support --

    def restore(self, selector: ObjectTypeSelector, obj: RytmObject) -> None:
        """Put a copy of *obj* back at *selector*."""
        with self.locked() as project:
            project.replace(selector, snapshot(obj))

    def attach(self, project: Project) -> None:
        """Switch to another project, dropping any half-received frame."""
        with self.locked():
            self.project = project
        with self._frame_lock:
            self._assembler.reset()
