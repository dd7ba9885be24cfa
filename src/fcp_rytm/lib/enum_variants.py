"""Closed variant sets for every enum field on the device.

Variants are the exact spellings accepted after ``name:`` in a command and
returned by a get. Each table is an ordered tuple; the first entry is the
field's factory default unless the model says otherwise.
"""

from __future__ import annotations

from fractions import Fraction


def _note_lengths() -> tuple[str, ...]:
    """Elektron step-length scale, from 1/8 step up to infinite."""
    lengths = [
        "0.125", "0.188", "1/64", "0.313", "0.375", "0.438", "1/32",
        "0.563", "0.625", "0.688", "0.75", "0.813", "0.875", "0.938", "1/16",
        "1.06", "1.13", "1.19", "1.25", "1.31", "1.38", "1.44", "1.5",
        "1.56", "1.63", "1.69", "1.75", "1.81", "1.88", "1.94", "1/8",
        "2.13", "2.25", "2.38", "2.5", "2.63", "2.75", "2.88", "3",
        "3.13", "3.25", "3.38", "3.5", "3.63", "3.75", "3.88", "1/4",
    ]
    # Above one beat the scale coarsens; whole-bar points get fraction names.
    for start, stop, step, bar in (
        (4.25, 8, 0.25, "1/2"),
        (8.5, 16, 0.5, "1/1"),
        (17, 32, 1, "2/1"),
        (34, 64, 2, "4/1"),
        (68, 128, 4, None),
    ):
        value = start
        while value < stop:
            lengths.append(f"{value:g}")
            value += step
        if bar:
            lengths.append(bar)
    lengths.extend(["128", "inf"])
    return tuple(lengths)


def _micro_times() -> tuple[str, ...]:
    out = []
    for n in range(-23, 24):
        if n == 0:
            out.append("0")
            continue
        frac = Fraction(n, 384)
        out.append(f"{frac.numerator}/{frac.denominator}")
    return tuple(out)


def _trig_conditions() -> tuple[str, ...]:
    percents = (
        1, 3, 4, 6, 9, 13, 19, 25, 33, 41, 50, 59, 67, 75, 81, 87, 91, 94, 96,
        98, 99, 100,
    )
    out = [f"{p}%" for p in percents]
    out += ["fill", "!fill", "pre", "!pre", "nei", "!nei", "1st", "!1st"]
    for b in range(2, 9):
        for a in range(1, b + 1):
            out.append(f"{a}:{b}")
    out.append("none")
    return tuple(out)


# ---------------------------------------------------------------------------
# Pattern / track / trig
# ---------------------------------------------------------------------------

SPEED = ("1x", "2x", "3/2x", "3/4x", "1/2x", "1/4x", "1/8x")
TIME_MODE = ("normal", "advanced")
ROOT_NOTE = ("c", "c#", "d", "d#", "e", "f", "f#", "g", "g#", "a", "a#", "b")
PAD_SCALE = (
    "chromatic", "ionianmajor", "dorian", "phrygian", "lydian", "mixolydian",
    "aeolianminor", "locrian", "pentatonicminor", "pentatonicmajor",
    "melodicminor", "harmonicminor", "wholetone", "blues", "combominor",
    "persian", "iwato", "insen", "hirajoshi", "pelog", "phrygiandominant",
    "wholehalfdiminished", "halfwholediminished", "spanish", "major", "minor",
)
NOTE_LENGTH = _note_lengths()
MICRO_TIME = _micro_times()
RETRIG_RATE = (
    "1/1", "1/2", "1/3", "1/4", "1/5", "1/6", "1/8", "1/10", "1/12", "1/16",
    "1/20", "1/24", "1/32", "1/40", "1/48", "1/64", "1/80",
)
TRIG_CONDITION = _trig_conditions()

# ---------------------------------------------------------------------------
# Kit
# ---------------------------------------------------------------------------

FX_COMP_ATTACK = ("0.03", "0.1", "0.3", "1", "3", "10", "30")
FX_COMP_RELEASE = ("0.1", "0.2", "0.4", "0.6", "1", "2", "a1", "a2")
FX_COMP_RATIO = ("1:2", "1:4", "1:8", "max")
FX_COMP_SIDE_CHAIN_EQ = ("off", "lpf", "hpf", "hit")

FX_LFO_DESTINATION = (
    "unset", "delaytime", "delaypingpong", "delaystereowidth", "delayfeedback",
    "delayhpfilter", "delaylpfilter", "delayreverbsend", "delaymixvolume",
    "delayoverdrive", "reverbpredelay", "reverbdecay", "reverbshelvingfreq",
    "reverbshelvinggain", "reverbhpfilter", "reverblpfilter", "reverbmixvolume",
    "distortionamount", "distortionsymmetry", "compthreshold", "compattack",
    "comprelease", "compratio", "compsidechaineq", "compmakeupgain",
    "compdrywetmix", "compvolume",
)

# Delay time on the musical grid, mapped to the raw delay time it writes.
FX_DELAY_TIME_ON_THE_GRID: dict[str, int] = {
    "1/128": 1,
    "1/64": 2,
    "1/64.": 3,
    "1/32": 4,
    "1/32.": 6,
    "1/16": 8,
    "1/16.": 12,
    "1/8": 16,
    "1/8.": 24,
    "1/4": 32,
    "1/4.": 48,
    "1/2": 64,
    "1/2.": 96,
    "1/1": 127,
}

# Shared by control-in, velocity and aftertouch modulation slots.
MOD_TARGET = (
    "unset", "lfomultiplier", "lfowaveform", "lfotrigmode", "lfospeed",
    "lfofade", "lfophase", "lfodepth", "syn1", "syn2", "syn3", "syn4", "syn5",
    "syn6", "syn7", "syn8", "samptune", "sampfinetune", "sampslice",
    "sampbitreduction", "sampstart", "sampend", "samploop", "samplevel",
    "filtattack", "filtsustain", "filtdecay", "filtrelease", "filtcutoff",
    "filtres", "filtenvamt", "ampattack", "amphold", "ampdecay",
    "ampoverdrive", "ampvolume", "amppan", "ampaccent", "ampdelaysend",
    "ampreverbsend",
)

# ---------------------------------------------------------------------------
# Sound
# ---------------------------------------------------------------------------

MACHINE_TYPE = (
    "bd_hard", "bd_classic", "sd_hard", "sd_classic", "rs_hard", "rs_classic",
    "cp_classic", "bt_classic", "xt_classic", "ch_classic", "oh_classic",
    "cy_classic", "cb_classic", "bd_fm", "sd_fm", "ut_noise", "ut_impulse",
    "ch_metallic", "oh_metallic", "cy_metallic", "cb_metallic", "bd_plastic",
    "bd_silky", "sd_natural", "hh_basic", "cy_ride", "bd_sharp", "disable",
    "sy_dual_vco", "sy_chip", "bd_acoustic", "sd_acoustic", "sy_raw",
    "hh_lab", "unset",
)
LFO_DESTINATION = (
    "unset", "syn1", "syn2", "syn3", "syn4", "syn5", "syn6", "syn7", "syn8",
    "sampletune", "samplefinetune", "sampleslice", "samplebitreduction",
    "samplestart", "sampleend", "sampleloop", "samplelevel", "filterenvelope",
    "filterattack", "filterdecay", "filtersustain", "filterrelease",
    "filterfrequency", "filterresonance", "ampattack", "amphold", "ampdecay",
    "ampoverdrive", "ampvolume", "amppan", "ampaccent", "ampdelaysend",
    "ampreverbsend",
)
FILTER_TYPE = ("lp2", "lp1", "bp", "hp1", "hp2", "bs", "pk")
LFO_MULTIPLIER = (
    "x1", "x2", "x4", "x8", "x16", "x32", "x64", "x128", "x256", "x512",
    "x1k", "x2k", ".1", ".2", ".4", ".8", ".16", ".32", ".64", ".128",
    ".256", ".512", ".1k", ".2k",
)
LFO_WAVEFORM = ("tri", "sin", "sqr", "saw", "exp", "rmp", "rnd")
LFO_MODE = ("free", "trig", "hold", "one", "half")
CHROMATIC_MODE = ("off", "synth", "sample", "synandsamp")

# ---------------------------------------------------------------------------
# Global
# ---------------------------------------------------------------------------

METRONOME_TIME_SIGNATURE = tuple(
    f"{num}/{den}" for den in (1, 2, 4, 8, 16) for num in range(1, 17)
)
USB_IN = ("prefx", "postfx")
USB_OUT = ("mainout", "trackrouting", "audioinput", "off")
USB_TO_MAIN_DB = ("0", "+6", "+12", "+18")
PORT_FUNCTION = ("midi", "din24", "din48")
PORT_ROUTING = ("disabled", "midi", "usb", "midiandusb")
PARAM_OUTPUT = ("nrpn", "cc")
DESTINATION = ("int", "int+ext", "ext")
PORTS_OUTPUT_CHANNEL = ("autochannel", "trackchannel")
MIDI_CHANNEL = tuple(str(ch) for ch in range(1, 17)) + ("off",)
AUTO_CHANNEL = tuple(str(ch) for ch in range(1, 17)) + ("auto",)
TURBO_SPEED = ("1x", "2x", "3.33x", "5x", "6.66x", "10x", "20x")

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

PARAMETER_MENU_ITEM = ("trig", "src", "smpl", "fltr", "amp", "lfo")
FX_PARAMETER_MENU_ITEM = ("trig", "delay", "reverb", "dist", "comp", "lfo")
SEQUENCER_MODE = ("normal", "chain", "song")
PATTERN_MODE = ("sequential", "directstart", "directjump", "tempjump")
SAMPLE_RECORDER_SOURCE = (
    "audl+r", "audl", "audr", "bd", "sd", "rs/cp", "bt", "lt", "mt/ht",
    "ch/oh", "cy/cb", "main", "usbl", "usbr", "usbl+r",
)
SAMPLE_RECORDER_RECORDING_LENGTH = (
    "1step", "2steps", "4steps", "8steps", "16steps", "32steps", "64steps",
    "128steps", "max",
)
