"""Módulo de subtítulos: códec SRT, segmentación y validación."""

from .codec import (
    SRTParseReport,
    format_srt_time,
    parse_srt,
    parse_srt_report,
    read_srt_file,
    serialize_srt,
    write_srt_file,
)
from .segmenter import generate_captions_from_text, generate_plan_captions
from .track import caption_at_time, caption_style_for, export_captions_for_platform
from .validator import CaptionValidationResult, validate_captions

__all__ = [
    "SRTParseReport",
    "format_srt_time",
    "parse_srt",
    "parse_srt_report",
    "read_srt_file",
    "serialize_srt",
    "write_srt_file",
    "generate_captions_from_text",
    "generate_plan_captions",
    "caption_at_time",
    "caption_style_for",
    "export_captions_for_platform",
    "CaptionValidationResult",
    "validate_captions",
]
