"""
Walk through a complete editing session without a UI.

Builds a synthetic product photo, crops it with simulated pointer drags,
blurs a lasso region, rotates, applies the 500x500 preset and saves the
result. Without GEMINI_API_KEY the background removal step fails
with an error status and leaves the history untouched.

Usage:
    python examples/packshot_session_demo.py [output_dir]
"""

import asyncio
import io
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from PIL import Image, ImageDraw

from PS_Libs.EditorLib.orchestrator import PackshotEditor
from PS_Libs.constants import RESIZE_PRESETS
from PS_Libs.errors import AiProcessingError
from PS_Libs.SelectionLib.selection_models import CropMode, PointerEvent
from PS_Libs.settings import EditorSettings


class OfflineCollaborator:
    """Stands in for the AI service when no API key is configured."""

    async def classify(self, image, mime):
        return "packshot"

    async def remove_background(self, image, mime, instruction=None):
        raise AiProcessingError("No GEMINI_API_KEY configured")

    async def auto_white_balance(self, image, mime):
        raise AiProcessingError("No GEMINI_API_KEY configured")


def build_sample_photo() -> bytes:
    """A red 'bottle' on an off-white background, as JPEG bytes."""
    img = Image.new("RGB", (800, 600), (250, 250, 250))
    draw = ImageDraw.Draw(img)
    draw.rectangle((300, 120, 460, 520), fill=(180, 30, 30))
    draw.ellipse((340, 60, 420, 140), fill=(40, 40, 40))
    buffer = io.BytesIO()
    img.save(buffer, format="JPEG")
    return buffer.getvalue()


def drag(editor, start, end):
    editor.selection.handle(PointerEvent.down(*start))
    editor.selection.handle(PointerEvent.move(*end))
    editor.selection.handle(PointerEvent.up(*end))


async def run_session(output_dir: Path) -> None:
    settings = EditorSettings.from_env()
    settings.state_file = output_dir / "packshot_state.json"

    ai = None if settings.gemini_api_key else OfflineCollaborator()
    editor = PackshotEditor.from_settings(settings, ai=ai)

    await editor.upload(build_sample_photo(), "sample.jpg")
    print(f"Uploaded: {editor.current_frame.size}, margins {editor.margin_info}")

    # Pretend the image is displayed at half size
    editor.set_rendered_size(400, 300)
    editor.start_crop(CropMode.FREE)
    drag(editor, (100, 20), (300, 280))
    await editor.apply_crop()

    frame = editor.current_frame
    editor.set_rendered_size(frame.width // 2, frame.height // 2)
    editor.start_blur()
    editor.selection.handle(PointerEvent.down(20, 20))
    for point in ((60, 20), (60, 60), (20, 60)):
        editor.selection.handle(PointerEvent.move(*point))
    editor.selection.handle(PointerEvent.up())
    await editor.apply_blur(intensity=8)

    await editor.rotate()
    await editor.rotate()
    await editor.rotate()
    await editor.rotate()

    await editor.remove_background()
    print(f"Background removal: {editor.notifier.current}")

    size, margin = RESIZE_PRESETS[0]
    await editor.resize_preset(size, margin)

    print("\nHistory:")
    for index, entry in enumerate(editor.history.entries):
        marker = "->" if index == editor.history.cursor else "  "
        print(f" {marker} {index}: {entry.label} ({entry.frame.width}x{entry.frame.height})")

    filename, data = editor.save()
    (output_dir / filename).write_bytes(data)
    print(f"\nSaved {output_dir / filename}")
    print(f"Actions today: {editor.action_count}")
    print(f"Quota: {editor.quota.snapshot()}")


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    output_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.cwd()
    output_dir.mkdir(parents=True, exist_ok=True)
    asyncio.run(run_session(output_dir))


if __name__ == "__main__":
    main()
