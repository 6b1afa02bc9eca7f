from recipe_importer.app.core.config import get_settings
from recipe_importer.app.services.debug_dump import DebugDumpService, format_transcript
from recipe_importer.app.services.segmentation.models import SplitResult


def _split():
    return SplitResult(
        title="Pancakes",
        servings="4",
        ingredients="1 cup flour",
        steps="1. Mix",
        equipment="Skillet",
        prep_minutes=5,
    )


def test_format_transcript_sections():
    transcript = format_transcript("raw words", _split())
    assert transcript.startswith("RAW TEXT:\nraw words\n")
    assert "Title: Pancakes" in transcript
    assert "Servings: 4" in transcript
    assert "Prep minutes: 5" in transcript
    assert "Cook minutes: \n" in transcript
    assert "[EQUIPMENT]\nSkillet" in transcript
    assert transcript.endswith("[STEPS]\n1. Mix")


def test_disabled_dump_writes_nothing(tmp_path):
    service = DebugDumpService(enabled=False, base_dir=tmp_path)
    assert service.append("Text Import", "content") is None
    assert service.dump_split("Text Import", "raw", _split()) is None
    assert list(tmp_path.iterdir()) == []


def test_disabled_by_default(tmp_path, monkeypatch):
    monkeypatch.setenv("RECIPE_DEBUG_DUMP_DIR", str(tmp_path))
    get_settings.cache_clear()
    service = DebugDumpService()
    assert service.enabled is False
    assert service.base_dir == tmp_path


def test_append_writes_header_and_content(dump, dump_dir):
    path = dump.append("PDF Import", "body text")
    assert path is not None
    assert path.parent == dump_dir
    assert dump.last_path == path
    content = path.read_text(encoding="utf-8")
    assert content.startswith("===== [")
    assert "] PDF Import =====\nbody text" in content


def test_append_failure_is_logged_not_raised(tmp_path, caplog):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    service = DebugDumpService(enabled=True, base_dir=blocker / "nested")
    assert service.append("Text Import", "content") is None
    assert service.last_path is None
    assert "Failed to write import transcript" in caplog.text
