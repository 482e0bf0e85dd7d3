from __future__ import annotations

from importlib import import_module as _import_module

_types_module = _import_module(".types", package=__name__)
DocumentKind = _types_module.DocumentKind
ExtractionResult = _types_module.ExtractionResult
ArchiveMemberResult = _types_module.ArchiveMemberResult

_classifier_module = _import_module(".classifier", package=__name__)
classify_filename = _classifier_module.classify_filename

_document_module = _import_module(".document", package=__name__)
extract_document = _document_module.extract_document

_archive_module = _import_module(".archive", package=__name__)
extract_archive = _archive_module.extract_archive

__all__: list[str] = [
    "DocumentKind",
    "ExtractionResult",
    "ArchiveMemberResult",
    "classify_filename",
    "extract_document",
    "extract_archive",
]
