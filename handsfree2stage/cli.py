#!/usr/bin/env python3
"""
Command-line viewer for handsfree2stage.

Runs the MediaPipe producer on a camera and shows the stage coordinates of
selected landmarks in a live rich table, optionally with an OpenCV preview
window driven by the video display modes.
"""

import argparse
import logging
import sys
import time
from dataclasses import replace
from typing import List, Optional, Sequence

import cv2
from rich.console import Console
from rich.live import Live
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import AppConfig, load_config
from .errors import HandsfreeError
from .extension import StageExtension
from .mediapipe_source import CaptureLoop, MediaPipeTracker
from .tracking.frame import Entity, EntityType
from .tracking.mapping import StageGeometry
from .tracking.menus import landmark_options
from .tracking.video import VideoMode

logger = logging.getLogger(__name__)

PREVIEW_WINDOW = "handsfree2stage"


class OpenCVPreview:
    """Video device that shows camera images in an OpenCV window."""

    def __init__(self, window_name: str = PREVIEW_WINDOW):
        self.window_name = window_name
        self.enabled = False
        self.mirrored = False

    def enable_video(self) -> None:
        self.enabled = True

    def disable_video(self) -> None:
        if self.enabled:
            cv2.destroyWindow(self.window_name)
        self.enabled = False

    def set_mirror(self, mirrored: bool) -> None:
        self.mirrored = bool(mirrored)

    def show(self, image) -> None:
        if not self.enabled or image is None:
            return
        if self.mirrored:
            image = cv2.flip(image, 1)
        cv2.imshow(self.window_name, image)


def setup_logging(console: Console, verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="handsfree2stage",
        description="Show hand, pose and face landmarks as stage coordinates",
    )
    parser.add_argument("--config", default=None, help="Path to a JSON config file")
    parser.add_argument(
        "--camera",
        type=int,
        default=None,
        help="Camera index (default: from config, 0)",
    )
    parser.add_argument(
        "--video",
        choices=[m.value for m in VideoMode],
        default=None,
        help="Video display mode (default: from config, off)",
    )
    parser.add_argument(
        "--entity",
        choices=[e.value for e in Entity],
        default=Entity.LEFT_HAND.value,
        help="Landmark set to watch",
    )
    parser.add_argument(
        "--landmark",
        type=int,
        nargs="+",
        default=[0],
        help="0-based landmark indices to watch",
    )
    parser.add_argument(
        "--list-landmarks",
        choices=[t.value for t in EntityType],
        default=None,
        help="Print the landmark menu for an entity type and exit",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def print_landmark_menu(console: Console, entity_type: str) -> None:
    table = Table(
        show_header=True, header_style="bold magenta", box=None, padding=(0, 2)
    )
    table.add_column("Value", style="cyan", justify="right")
    table.add_column("Label")
    for item in landmark_options(entity_type):
        table.add_row(str(item.value), item.text)
    console.print(table)


def _format_coord(value: Optional[float]) -> str:
    return "[dim]-[/dim]" if value is None else f"{value:8.1f}"


def build_status_table(
    extension: StageExtension,
    entity: Entity,
    landmarks: Sequence[int],
    loop: CaptureLoop,
) -> Table:
    frame = extension.state.store.current()
    detected = ", ".join(e.value for e in frame.detected) or "nothing"

    table = Table(
        title=f"[bold cyan]{entity.value}[/bold cyan]",
        caption=(
            f"video: {extension.video.mode.value} | mirror: {extension.state.mirror} | "
            f"frames: {loop.processed_frames} | detected: {detected}"
        ),
        header_style="bold magenta",
    )
    table.add_column("Landmark", style="cyan", justify="right")
    table.add_column("X", justify="right")
    table.add_column("Y", justify="right")

    for index in landmarks:
        point = extension.accessor.get_point(entity, index)
        x, y = point if point is not None else (None, None)
        table.add_row(str(index), _format_coord(x), _format_coord(y))
    return table


def run_viewer(
    console: Console,
    config: AppConfig,
    entity: Entity,
    landmarks: List[int],
    video_mode: VideoMode,
) -> None:
    preview = OpenCVPreview()
    extension = StageExtension(
        device=preview,
        geometry=StageGeometry(config.stage.half_width, config.stage.half_height),
    )
    extension.video.set_mode(video_mode)

    with MediaPipeTracker(config.tracker) as tracker:
        with CaptureLoop(extension.state.store, tracker, config.capture) as loop:
            with Live(console=console, refresh_per_second=15) as live:
                while True:
                    live.update(build_status_table(extension, entity, landmarks, loop))
                    if preview.enabled:
                        preview.show(loop.last_image)
                        if cv2.waitKey(1) & 0xFF == ord("q"):
                            break
                    else:
                        time.sleep(1 / 30)
    if preview.enabled:
        cv2.destroyAllWindows()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    console = Console()
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(console, args.verbose)

    if args.list_landmarks:
        print_landmark_menu(console, args.list_landmarks)
        return 0

    try:
        config = load_config(args.config)
        if args.camera is not None:
            capture = replace(config.capture, camera_index=args.camera)
            config = replace(config, capture=capture)
        logger.debug("Using config: %s", config)
        video_mode = config.initial_video_mode
        if args.video:
            video_mode = VideoMode.parse(args.video)
        entity = Entity(args.entity)

        console.print(
            Panel.fit(
                "[bold cyan]handsfree2stage: live landmark viewer[/bold cyan]",
                border_style="cyan",
            )
        )
        console.print(f"  Camera:    [cyan]{config.capture.camera_index}[/cyan]")
        capture_size = f"{config.capture.width}x{config.capture.height}"
        console.print(f"  Capture:   [cyan]{capture_size}[/cyan]")
        console.print(f"  Video:     [cyan]{video_mode.value}[/cyan]")
        console.print(f"  Entity:    [cyan]{entity.value}[/cyan]")
        landmark_list = ", ".join(map(str, args.landmark))
        console.print(f"  Landmarks: [cyan]{landmark_list}[/cyan]\n")

        run_viewer(console, config, entity, args.landmark, video_mode)
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped by user.[/yellow]")
        return 130
    except HandsfreeError as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        return 1
    except Exception as e:
        console.print(f"\n[bold red]Unexpected error:[/bold red] {e}")
        import traceback

        traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
