"""Global model: sequencer config, routing, MIDI sync/ports/channels, metronome."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated

from fcp_rytm.lib import enum_variants as ev
from fcp_rytm.model.fields import (
    BoolField,
    EnumField,
    IntField,
    SlotField,
    SymbolField,
    fixed_length,
    table,
)

GLOBAL_VERSION = 2
ROUTED_TRACKS = 12

TrackFlags = Annotated[list[bool], fixed_length(ROUTED_TRACKS)]
TrackChannels = Annotated[list[str], fixed_length(ROUTED_TRACKS)]


@dataclass
class Global:
    index: int = 0
    is_work_buffer: bool = False
    version: int = GLOBAL_VERSION

    kit_reload_on_change: bool = False
    quantize_live_record: bool = False
    auto_track_switch: bool = True

    route_to_main: TrackFlags = field(default_factory=lambda: [True] * ROUTED_TRACKS)
    send_to_fx: TrackFlags = field(default_factory=lambda: [True] * ROUTED_TRACKS)
    usb_in: str = "prefx"
    usb_out: str = "mainout"
    usb_to_main_db: str = "0"

    clock_receive: bool = True
    clock_send: bool = False
    transport_receive: bool = True
    transport_send: bool = False
    program_change_receive: bool = False
    program_change_send: bool = False
    receive_notes: bool = True
    receive_cc_nrpn: bool = True
    turbo_speed: str = "1x"

    out_port_function: str = "midi"
    thru_port_function: str = "midi"
    input_from: str = "midiandusb"
    output_to: str = "midiandusb"
    param_output: str = "nrpn"
    pad_dest: str = "int+ext"
    pressure_dest: str = "int+ext"
    encoder_dest: str = "int+ext"
    mute_dest: str = "int+ext"
    ports_output_channel: str = "autochannel"

    auto_channel: str = "14"
    track_channels: TrackChannels = field(
        default_factory=lambda: [str(ch + 1) for ch in range(ROUTED_TRACKS)]
    )
    track_fx_channel: str = "off"
    program_change_in_channel: str = "auto"
    program_change_out_channel: str = "auto"
    performance_channel: str = "auto"

    metronome_active: bool = False
    metronome_pre_roll_bars: int = 0
    metronome_volume: int = 64
    metronome_time_signature: str = "4/4"

    dump: bytes | None = None


GLOBAL_FIELDS = table(
    IntField("version", "version", 0, 0xFFFF, read_only=True),
    IntField("index", "index", 0, 3, read_only=True),
    BoolField("iswb", "is_work_buffer", read_only=True),

    BoolField("kitreloadonchg", "kit_reload_on_change"),
    BoolField("quantizeliverec", "quantize_live_record"),
    BoolField("autotrackswitch", "auto_track_switch"),

    SlotField(BoolField("routetomain", "route_to_main"), ROUTED_TRACKS, "track index"),
    SlotField(BoolField("sendtofx", "send_to_fx"), ROUTED_TRACKS, "track index"),

    BoolField("clockreceive", "clock_receive"),
    BoolField("clocksend", "clock_send"),
    BoolField("transportreceive", "transport_receive"),
    BoolField("transportsend", "transport_send"),
    BoolField("pgmchangereceive", "program_change_receive"),
    BoolField("pgmchangesend", "program_change_send"),
    BoolField("receivenotes", "receive_notes"),
    BoolField("receiveccnrpn", "receive_cc_nrpn"),
    SymbolField("turbospeed", "turbo_speed"),

    BoolField("metronomeactive", "metronome_active"),
    IntField("metronomeprerollbars", "metronome_pre_roll_bars", 0, 16),
    IntField("metronomelev", "metronome_volume", 0, 127),

    EnumField("metronometimesig", "metronome_time_signature", ev.METRONOME_TIME_SIGNATURE),
    EnumField("usbin", "usb_in", ev.USB_IN),
    EnumField("usbout", "usb_out", ev.USB_OUT),
    EnumField("usbtomaindb", "usb_to_main_db", ev.USB_TO_MAIN_DB),
    EnumField("outportfunction", "out_port_function", ev.PORT_FUNCTION),
    EnumField("thruportfunction", "thru_port_function", ev.PORT_FUNCTION),
    EnumField("inputfrom", "input_from", ev.PORT_ROUTING),
    EnumField("outputto", "output_to", ev.PORT_ROUTING),
    EnumField("paramoutput", "param_output", ev.PARAM_OUTPUT),
    EnumField("paddest", "pad_dest", ev.DESTINATION),
    EnumField("pressuredest", "pressure_dest", ev.DESTINATION),
    EnumField("encoderdest", "encoder_dest", ev.DESTINATION),
    EnumField("mutedest", "mute_dest", ev.DESTINATION),
    EnumField("portsoutputchannel", "ports_output_channel", ev.PORTS_OUTPUT_CHANNEL),
    EnumField("autochannel", "auto_channel", ev.MIDI_CHANNEL),
    SlotField(
        EnumField("trackchannels", "track_channels", ev.MIDI_CHANNEL),
        ROUTED_TRACKS,
        "track index",
    ),
    EnumField("trackfxchannel", "track_fx_channel", ev.MIDI_CHANNEL),
    EnumField("pgmchangeinchannel", "program_change_in_channel", ev.AUTO_CHANNEL),
    EnumField("pgmchangeoutchannel", "program_change_out_channel", ev.AUTO_CHANNEL),
    EnumField("performancechannel", "performance_channel", ev.AUTO_CHANNEL),
)
