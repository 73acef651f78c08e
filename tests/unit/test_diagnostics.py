"""진단 아티팩트 저장 테스트"""
from search_provider.crawlers.diagnostics import DiagnosticArtifactSink


def test_write_creates_html_file(tmp_path):
    sink = DiagnosticArtifactSink(tmp_path / "nested" / "results")

    path = sink.write("<html>page</html>")

    assert path is not None
    assert path.suffix == ".html"
    assert path.parent == tmp_path / "nested" / "results"
    assert path.read_text(encoding="utf-8") == "<html>page</html>"


def test_unique_names(tmp_path):
    sink = DiagnosticArtifactSink(tmp_path)

    assert sink.write("a") != sink.write("a")


def test_empty_content_not_written(tmp_path):
    sink = DiagnosticArtifactSink(tmp_path / "results")

    assert sink.write("") is None
    assert not (tmp_path / "results").exists()


def test_write_error_swallowed(tmp_path):
    """쓰기 실패는 로그만 남기고 None"""
    blocker = tmp_path / "file"
    blocker.write_text("x")
    sink = DiagnosticArtifactSink(blocker / "results")

    assert sink.write("<html></html>") is None


def test_default_directory_from_settings():
    from search_provider.core.config import settings

    assert str(DiagnosticArtifactSink().directory) == settings.engine_result_directory
