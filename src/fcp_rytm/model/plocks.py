"""Parameter-lockable fields.

A lock overrides one kit FX or sound parameter on a single trig. Locks reuse
the kit and sound field definitions for validation and rendering; only the
storage differs (``Trig.plocks`` instead of the owning object).
"""

from __future__ import annotations

from fcp_rytm.model.fields import FieldTable
from fcp_rytm.model.kit import KIT_FIELDS
from fcp_rytm.model.sound import SOUND_FIELDS

UNSET = "unset"

KIT_LOCKABLE = (
    "fxdeltime", "fxdelpingpong", "fxdelstereowidth", "fxdelfeedback",
    "fxdelhpf", "fxdellpf", "fxdelrevsend", "fxdellev",
    "fxrevpredel", "fxrevdecay", "fxrevfreq", "fxrevgain", "fxrevhpf",
    "fxrevlpf", "fxrevlev",
    "fxcompthr", "fxcompgain", "fxcompmix", "fxcomplev",
    "fxlfospeed", "fxlfofade", "fxlfostartphase", "fxlfodepth",
    "fxcompattack", "fxcomprelease", "fxcompratio", "fxcompsidechaineq",
    "fxlfodest",
)

SOUND_LOCKABLE = (
    "ampattack", "amphold", "ampdecay", "ampoverdrive", "ampdelsend",
    "amprevsend", "amppan", "amplev",
    "filtattack", "filthold", "filtdecay", "filtrelease", "filtcutoff",
    "filtres", "filtenvamt",
    "lfospeed", "lfofade", "lfostartphase", "lfodepth",
    "samptune", "sampfinetune", "sampnumber", "sampbitreduction",
    "sampstart", "sampend", "samploopflag", "samplev",
    "lfodest", "filtertype", "lfomultiplier", "lfowaveform", "lfomode",
)

PLOCK_FIELDS: FieldTable = {
    **{name: KIT_FIELDS[name] for name in KIT_LOCKABLE},
    **{name: SOUND_FIELDS[name] for name in SOUND_LOCKABLE},
}
