"""
Entrada principal: resolución de planes y herramientas de subtítulos.

Uso:
    videoplan resolve plan.json -o resolved.json [--captions captions.srt] [--preload]
    videoplan validate plan.json
    videoplan captions segment --text "..." --duration 12 -o captions.srt
    videoplan captions check captions.srt
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from .assets.generation import AssetStatus
from .assets.readiness import RenderReadiness, validate_plan_for_rendering
from .assets.requirements import extract_image_requirements
from .captions import (
    generate_captions_from_text,
    generate_plan_captions,
    read_srt_file,
    serialize_srt,
    validate_captions,
    write_srt_file,
)
from .config import Settings
from .director.parser import PlanParser
from .orchestrator import PlanResolver

logger = logging.getLogger(__name__)
console = Console()


def _print_readiness(readiness: RenderReadiness) -> None:
    if readiness.valid:
        console.print(Panel("[green]✓ Plan listo para render[/green]", title="Resultado"))
        return
    console.print(Panel("[red]✗ Plan incompleto[/red]", title="Resultado"))
    if readiness.missing_images:
        console.print("\n[red]Imágenes sin fuente:[/red]")
        for element_id in readiness.missing_images:
            console.print(f"  • {element_id}")
    if readiness.issues:
        console.print("\n[yellow]Problemas:[/yellow]")
        for issue in readiness.issues:
            console.print(f"  • {issue}")


def _load_plan(path: str):
    try:
        return PlanParser().parse_file(path)
    except (OSError, ValueError, ValidationError) as e:
        console.print(f"[red]Error leyendo plan: {e}[/red]")
        return None


def cmd_resolve(args) -> int:
    plan = _load_plan(args.plan)
    if plan is None:
        return 1

    settings = Settings.from_env()
    missing = settings.missing_fields()
    if missing:
        console.print(f"[red]Falta configuración: {', '.join(missing)}[/red]")
        return 2

    # Importación diferida: el cliente HTTP solo hace falta para resolver
    from .infrastructure.asset_service import AssetServiceClient

    total = sum(
        len(extract_image_requirements(scene.elements, plan.required_assets))
        for scene in plan.scenes
    )

    with AssetServiceClient(settings) as client, Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Generando imágenes...", total=total or None)

        def on_progress(scene_index: int, asset_id: str, status: AssetStatus) -> None:
            progress.update(task, description=f"Escena {scene_index + 1}: {asset_id} ({status.value})")
            if status in (AssetStatus.READY, AssetStatus.ERROR):
                progress.advance(task)

        resolution = PlanResolver(client).resolve(plan, on_progress=on_progress)

    output = Path(args.output) if args.output else Path(args.plan).with_suffix(".resolved.json")
    with open(output, "w", encoding="utf-8") as f:
        json.dump(resolution.plan.to_render_payload(), f, indent=2, ensure_ascii=False)
    console.print(f"[green]✓ Plan resuelto: {output}[/green]")

    if args.captions:
        captions = generate_plan_captions(resolution.plan)
        write_srt_file(captions, args.captions)
        console.print(f"[green]✓ Subtítulos: {args.captions} ({len(captions)} bloques)[/green]")

    if args.preload:
        from .infrastructure.preloader import ImagePreloader
        from .utils.cache import AssetCache

        with AssetCache(settings.cache_dir, settings.cache_ttl_hours) as cache:
            summary = ImagePreloader(cache, settings.preload_concurrency).preload_plan(resolution.plan)
        console.print(f"[cyan]Precarga: {len(summary.loaded)} nuevas, {len(summary.failed)} fallidas[/cyan]")

    _print_readiness(resolution.readiness)
    return 0 if resolution.readiness.valid else 3


def cmd_validate(args) -> int:
    plan = _load_plan(args.plan)
    if plan is None:
        return 1
    readiness = validate_plan_for_rendering(plan)
    _print_readiness(readiness)
    return 0 if readiness.valid else 3


def cmd_captions_segment(args) -> int:
    if args.file:
        text = Path(args.file).read_text(encoding="utf-8")
    else:
        text = args.text or ""
    try:
        captions = generate_captions_from_text(text, args.duration, args.words_per_caption)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        return 1

    if args.output:
        write_srt_file(captions, args.output)
        console.print(f"[green]✓ {len(captions)} subtítulos: {args.output}[/green]")
    else:
        console.print(serialize_srt(captions), markup=False, highlight=False)
    return 0


def cmd_captions_check(args) -> int:
    try:
        report = read_srt_file(args.file)
    except OSError as e:
        console.print(f"[red]Error leyendo archivo: {e}[/red]")
        return 1

    result = validate_captions(report.captions)
    console.print(f"Subtítulos leídos: {len(report.captions)}")
    if report.skipped_blocks:
        console.print(f"[yellow]Bloques descartados: {report.skipped_blocks}[/yellow]")

    if result.is_valid:
        console.print(Panel("[green]✓ Subtítulos válidos[/green]", title="Resultado"))
        return 0
    console.print(Panel("[red]✗ Subtítulos inválidos[/red]", title="Resultado"))
    for error in result.errors:
        console.print(f"  • {error}")
    return 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="videoplan", description="Resolución de planes de video")
    parser.add_argument("-v", "--verbose", action="store_true", help="Logging detallado")
    commands = parser.add_subparsers(dest="command", required=True)

    resolve = commands.add_parser("resolve", help="Genera las imágenes faltantes del plan")
    resolve.add_argument("plan", help="Archivo JSON del plan")
    resolve.add_argument("-o", "--output", help="Archivo de salida del plan resuelto")
    resolve.add_argument("--captions", help="Escribe un SRT con los voiceovers de las escenas")
    resolve.add_argument("--preload", action="store_true", help="Precarga las imágenes resueltas")
    resolve.set_defaults(func=cmd_resolve)

    validate = commands.add_parser("validate", help="Verifica que el plan esté listo para render")
    validate.add_argument("plan", help="Archivo JSON del plan")
    validate.set_defaults(func=cmd_validate)

    captions = commands.add_parser("captions", help="Herramientas de subtítulos")
    caption_commands = captions.add_subparsers(dest="captions_command", required=True)

    segment = caption_commands.add_parser("segment", help="Genera subtítulos desde texto")
    source = segment.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help="Texto de narración")
    source.add_argument("--file", help="Archivo con el texto de narración")
    segment.add_argument("--duration", type=float, required=True, help="Duración total en segundos")
    segment.add_argument("--words-per-caption", type=int, default=4)
    segment.add_argument("-o", "--output", help="Archivo .srt de salida")
    segment.set_defaults(func=cmd_captions_segment)

    check = caption_commands.add_parser("check", help="Valida un archivo .srt")
    check.add_argument("file", help="Archivo .srt")
    check.set_defaults(func=cmd_captions_check)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
