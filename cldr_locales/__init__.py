"""CLDR XML to resolved locale data generator package."""

from .errors import LocaleDataError
from .models import LocaleDescriptor, LocaleIdentity, LocaleModel, ResolvedLocale
from .processing import assemble_model, collect_model, select_locales
from .writers import write_model

__all__ = [
    "LocaleDataError",
    "LocaleDescriptor",
    "LocaleIdentity",
    "LocaleModel",
    "ResolvedLocale",
    "assemble_model",
    "collect_model",
    "select_locales",
    "write_model",
]
