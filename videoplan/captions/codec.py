"""
Códec SRT (SubRip) para tracks de subtítulos.

Formato:
    1
    00:00:00,000 --> 00:00:02,000
    Texto del primer subtítulo

La lectura es tolerante: los bloques malformados se descartan sin error.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, Union

from ..domain.models import CaptionData

logger = logging.getLogger(__name__)

TIMESTAMP_LINE = re.compile(
    r"(\d{2}):(\d{2}):(\d{2}),(\d{3})\s*-->\s*(\d{2}):(\d{2}):(\d{2}),(\d{3})"
)
BLOCK_SEPARATOR = re.compile(r"\n\n+")


@dataclass
class SRTParseReport:
    """Resultado de una lectura SRT, incluyendo los bloques descartados."""
    captions: List[CaptionData] = field(default_factory=list)
    skipped_blocks: int = 0


def _to_seconds(hours: str, minutes: str, secs: str, millis: str) -> float:
    # Acumular en milisegundos enteros evita errores de redondeo al sumar
    total_ms = int(hours) * 3_600_000 + int(minutes) * 60_000 + int(secs) * 1000 + int(millis)
    return total_ms / 1000


def format_srt_time(seconds: float) -> str:
    """
    Formatea segundos a formato SRT (HH:MM:SS,mmm).

    Args:
        seconds: Tiempo en segundos (no negativo)

    Returns:
        Tiempo formateado
    """
    total_ms = round(seconds * 1000)
    hours, rest = divmod(total_ms, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    secs, millis = divmod(rest, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d},{millis:03d}"


def _block_lines(block: str) -> List[str]:
    # Solo se descartan las líneas en blanco de los bordes; el texto queda intacto
    lines = block.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


def parse_srt_report(srt_content: str) -> SRTParseReport:
    """
    Lee texto SRT y cuenta los bloques que no se pudieron interpretar.

    Args:
        srt_content: Contenido del archivo SRT

    Returns:
        SRTParseReport con los subtítulos válidos y el conteo de descartados
    """
    report = SRTParseReport()
    normalized = srt_content.replace("\r\n", "\n")
    if not normalized.strip():
        return report

    for block in BLOCK_SEPARATOR.split(normalized):
        lines = _block_lines(block)
        if not lines:
            continue
        if len(lines) < 3:
            report.skipped_blocks += 1
            continue

        match = TIMESTAMP_LINE.search(lines[1])
        if not match:
            report.skipped_blocks += 1
            continue

        groups = match.groups()
        report.captions.append(CaptionData(
            start_time=_to_seconds(*groups[:4]),
            end_time=_to_seconds(*groups[4:]),
            # El texto es todo lo que sigue a la línea de tiempos, sin recortar
            text="\n".join(lines[2:]),
        ))

    if report.skipped_blocks:
        logger.debug(f"SRT: {report.skipped_blocks} bloques malformados descartados")
    return report


def parse_srt(srt_content: str) -> List[CaptionData]:
    """Lee texto SRT y devuelve el track de subtítulos (tolerante a errores)."""
    return parse_srt_report(srt_content).captions


def serialize_srt(captions: Sequence[CaptionData]) -> str:
    """
    Serializa un track de subtítulos a texto SRT.

    Args:
        captions: Subtítulos en orden

    Returns:
        Texto SRT (bloques separados por una línea en blanco)
    """
    entries = []
    for index, caption in enumerate(captions, 1):
        start = format_srt_time(caption.start_time)
        end = format_srt_time(caption.end_time)
        entries.append(f"{index}\n{start} --> {end}\n{caption.text}\n")
    return "\n".join(entries)


def write_srt_file(captions: Sequence[CaptionData], path: Union[str, Path]) -> Path:
    """Escribe el track como archivo .srt (UTF-8)."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8", newline="\n") as f:
        f.write(serialize_srt(captions))
    logger.info(f"Subtítulos SRT generados: {output_path}")
    return output_path


def read_srt_file(path: Union[str, Path]) -> SRTParseReport:
    """Lee un archivo .srt (UTF-8, tolera BOM)."""
    with open(path, "r", encoding="utf-8-sig") as f:
        return parse_srt_report(f.read())
