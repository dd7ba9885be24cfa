"""FcpDomainAdapter implementation for the Analog Rytm: bridges fcp-core to fcp-rytm.

This adapter satisfies the ``FcpDomainAdapter[Project, SnapshotEvent]``
protocol from fcp-core. Every op string is re-tokenized into a value list
and handed to the :class:`RytmEngine`.
"""

from __future__ import annotations

import logging

from fcp_core import EventLog as CoreEventLog
from fcp_core import OpResult, ParsedOp, tokenize

from fcp_rytm.config import RytmConfig
from fcp_rytm.engine import RytmEngine
from fcp_rytm.errors import InvalidExportFormat, RytmError, ValidationError
from fcp_rytm.logging_setup import set_log_level
from fcp_rytm.model.event_log import SnapshotEvent
from fcp_rytm.model.project import Project
from fcp_rytm.parser.value import Symbol, ValueList, values_from_text
from fcp_rytm.serialization.project_file import load_project, save_project
from fcp_rytm.server.queries import dispatch_query
from fcp_rytm.server.reply import format_reply

logger = logging.getLogger(__name__)


def parse_hex_bytes(tokens: list[str]) -> bytes:
    """``F0 00 20``, ``0xF0 0x00`` or ``F00020`` -> raw bytes."""
    text = "".join(t[2:] if t.lower().startswith("0x") else t for t in tokens)
    try:
        return bytes.fromhex(text)
    except ValueError:
        raise ValidationError(
            f"Invalid hex bytes: {' '.join(tokens)!r}. Example: sysex F0 00 20 3C 07 ... F7"
        ) from None


class RytmAdapter:
    """FcpDomainAdapter implementation for Analog Rytm projects.

    Satisfies the ``FcpDomainAdapter[Project, SnapshotEvent]`` protocol
    required by ``create_fcp_server()``.
    """

    def __init__(self, config: RytmConfig | None = None) -> None:
        self.base_config = config if config is not None else RytmConfig()
        self.engine = RytmEngine(config=self.base_config)

    # -- FcpDomainAdapter protocol methods --

    def create_empty(self, title: str, params: dict[str, str]) -> Project:
        """Create a new project; ``device:`` and ``timeout:`` override config."""
        config = self.base_config.with_params(params)
        project = Project.create(title)
        self.engine = RytmEngine(project, config)
        logger.info("New project %r (device %d, lock timeout %gs)",
                    title, config.device_id, config.lock_timeout)
        return project

    def serialize(self, model: Project, path: str) -> None:
        save_project(model, path)

    def deserialize(self, path: str) -> Project:
        return load_project(path)

    def rebuild_indices(self, model: Project) -> None:
        self._bind(model)

    def get_digest(self, model: Project) -> str:
        return model.get_digest()

    def dispatch_op(self, op: ParsedOp, model: Project, log: CoreEventLog) -> OpResult:
        """Execute one op against the project."""
        self._bind(model)
        values = values_from_text(op.raw)[1:]
        try:
            return self._dispatch(op, values, log)
        except RytmError as exc:
            return OpResult(success=False, message=str(exc))

    def dispatch_query(self, query: str, model: Project) -> str:
        self._bind(model)
        return dispatch_query(query, self.engine)

    def reverse_event(self, event: SnapshotEvent, model: Project) -> None:
        """Put back the object as it was before *event*."""
        if isinstance(event, SnapshotEvent):
            self._bind(model)
            self.engine.restore(event.selector, event.before)

    def replay_event(self, event: SnapshotEvent, model: Project) -> None:
        if isinstance(event, SnapshotEvent):
            self._bind(model)
            self.engine.restore(event.selector, event.after)

    # -- Internal helpers --

    def _bind(self, model: Project) -> None:
        if self.engine.project is not model:
            self.engine.attach(model)

    def _dispatch(self, op: ParsedOp, values: ValueList, log: CoreEventLog) -> OpResult:
        verb = op.verb
        if verb in ("get", "set"):
            reply, event = self.engine.execute(verb, values)
            if event is None:
                return OpResult(success=True, message=format_reply(reply), prefix="=")
            log.append(event)
            return OpResult(success=True, message=event.summary)

        if verb == "query":
            request = self.engine.prepare_query(values)
            return OpResult(success=True, message=request.hex(" ").upper(), prefix="=")

        if verb == "send":
            frame = self.engine.prepare_sysex(values)
            return OpResult(success=True, message=frame.hex(" ").upper(), prefix="=")

        if verb == "export":
            return self._op_export(tokenize(op.raw)[1:])

        if verb == "sysex":
            return self._op_sysex(tokenize(op.raw)[1:], log)

        if verb == "loglevel":
            if len(values) != 1 or not isinstance(values[0], Symbol):
                raise ValidationError("loglevel takes one of: error, warn, info, debug, trace.")
            set_log_level(values[0].value)
            return OpResult(success=True, message=f"log level {values[0].value}")

        return OpResult(success=False, message=f"Unknown verb: {verb!r}")

    def _op_export(self, tokens: list[str]) -> OpResult:
        if len(tokens) < 2:
            raise InvalidExportFormat()
        target = " ".join(tokens[:-1])
        path = self.engine.export(values_from_text(target), tokens[-1])
        return OpResult(success=True, message=f"exported {target} to {path}")

    def _op_sysex(self, tokens: list[str], log: CoreEventLog) -> OpResult:
        data = parse_hex_bytes(tokens)
        if not data:
            raise ValidationError("sysex needs at least one byte. Example: sysex F0 ... F7")
        applied: list[str] = []
        try:
            for byte in data:
                event = self.engine.handle_sysex_byte(byte)
                if event is not None:
                    log.append(event)
                    applied.append(str(event.selector))
        except RytmError as exc:
            if applied:
                raise RytmError(
                    f"{exc} (applied before the error: {', '.join(applied)})"
                ) from exc
            raise

        pending = self.engine.sysex_pending
        msg = f"{len(data)} bytes"
        if applied:
            msg += f", applied {', '.join(applied)}"
        if pending:
            msg += f", {pending} bytes buffered"
        return OpResult(success=True, message=msg)

