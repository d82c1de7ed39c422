"""Load the configured signature extractor by import path."""

import importlib

from face_duel.errors import ExtractorLoadError
from face_duel.services.capture import SignatureExtractor


def load_extractor(path: str | None) -> SignatureExtractor:
    """Instantiate an extractor from a ``package.module:factory`` path."""
    if not path:
        raise ExtractorLoadError("SIGNATURE_EXTRACTOR is not configured")
    module_name, _, attribute = path.partition(":")
    if not module_name or not attribute:
        raise ExtractorLoadError(f"Expected 'module:factory', got {path!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ExtractorLoadError(f"Cannot import {module_name}: {exc}") from exc
    factory = getattr(module, attribute, None)
    if not callable(factory):
        raise ExtractorLoadError(f"{path} is not callable")
    extractor = factory()
    if not callable(getattr(extractor, "extract", None)):
        raise ExtractorLoadError(f"{path} did not return an extractor")
    return extractor
