import pytest
from pydantic import ValidationError
from kanji_coverage.core.config import AnalysisConfig
from kanji_coverage.core.errors import CollaboratorError, InputUnavailableError
from kanji_coverage.services.coverage_service import (
    analyze_text,
    load_curriculum,
    run_analysis,
)

API_KEY = "0123456789abcdef0123456789abcdef"


def test_load_curriculum(write_file):
    path = write_file("curriculum.txt", "木\n水\n火\n木\n")
    assert load_curriculum(path) == "木水火"


def test_run_analysis_scenario(curriculum_file, write_file, fake_provider):
    """curriculum 木水火, learner knows 木, text 木木水山."""
    text = write_file("text.txt", "木木水山\n")
    config = AnalysisConfig(
        api_key=API_KEY,
        levels="1,2",
        input_files=(text,),
        curriculum_path=curriculum_file,
        include_characters=True,
    )

    report = run_analysis(config, provider=fake_provider)

    assert fake_provider.calls == [(API_KEY, "1,2")]
    assert report.all.characters == "木水山"
    assert report.known.characters == "木"
    assert report.known.percentage == pytest.approx(50.0)
    assert report.unknown.characters == "水山"
    assert report.unknown.percentage == pytest.approx(50.0)
    assert report.unknown_in_curriculum.characters == "水"
    assert report.unknown_in_curriculum.percentage == pytest.approx(25.0)
    assert report.not_in_curriculum.characters == "山"
    assert report.not_in_curriculum.percentage == pytest.approx(25.0)
    assert report.kanji_density == pytest.approx(100.0)
    assert report.curriculum_size == 3


def test_run_analysis_empty_text(curriculum_file, write_file, fake_provider):
    text = write_file("empty.txt", "")
    config = AnalysisConfig(
        api_key=API_KEY, input_files=(text,), curriculum_path=curriculum_file
    )

    report = run_analysis(config, provider=fake_provider)

    assert report.all.count == 0
    assert report.known.percentage == 0.0
    assert report.unknown.percentage == 0.0
    assert report.kanji_density == 0.0


def test_run_analysis_missing_curriculum(tmp_path, write_file, fake_provider):
    """Nothing is fetched when the curriculum cannot be read."""
    text = write_file("text.txt", "木\n")
    config = AnalysisConfig(
        api_key=API_KEY,
        input_files=(text,),
        curriculum_path=str(tmp_path / "missing.txt"),
    )

    with pytest.raises(InputUnavailableError):
        run_analysis(config, provider=fake_provider)
    assert fake_provider.calls == []


def test_run_analysis_provider_failure(curriculum_file, write_file):
    text = write_file("text.txt", "木\n")
    config = AnalysisConfig(
        api_key=API_KEY, input_files=(text,), curriculum_path=curriculum_file
    )

    def failing_provider(api_key, levels=None):
        raise CollaboratorError("WaniKani is down")

    with pytest.raises(CollaboratorError):
        run_analysis(config, provider=failing_provider)


def test_run_analysis_verbose_output(curriculum_file, write_file, fake_provider, capsys):
    text = write_file("text.txt", "木\n")
    config = AnalysisConfig(
        api_key=API_KEY, input_files=(text,), curriculum_path=curriculum_file
    )

    run_analysis(config, provider=fake_provider, verbose=True)

    out = capsys.readouterr().out
    assert "Hello, koichi of sect Turtles!" in out
    assert "You already know 1/3 of WK kanji." in out


def test_analyze_text_non_japanese(learner):
    report = analyze_text(["Hello world", "no kanji here"], "木水火", learner)
    assert report.all.count == 0
    assert report.kanji_density == 0.0
    assert report.text_length == 24


def test_config_is_frozen():
    config = AnalysisConfig(api_key=API_KEY)
    with pytest.raises(ValidationError):
        config.api_key = "other"
