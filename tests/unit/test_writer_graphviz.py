from pathlib import Path

import pytest

from dot_gen import graphviz
from dot_gen.errors import GraphvizError, OutputError
from dot_gen.samples import create_sample_files
from dot_gen.writer import image_path, write_dot


def test_write_dot_creates_parents_and_adds_newline(tmp_path):
    path = tmp_path / "nested" / "dir" / "model.dot"

    write_dot(path, "digraph g {}")

    assert path.read_text(encoding="utf-8") == "digraph g {}\n"


def test_write_dot_unwritable_destination(tmp_path):
    blocker = tmp_path / "file.txt"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(OutputError):
        write_dot(blocker / "model.dot", "digraph g {}\n")


def test_image_path():
    assert image_path(Path("out/model.dot"), "svg") == Path("out/model.svg")
    assert image_path(Path("model"), ".pdf") == Path("model.pdf")


def test_render_command_shape():
    assert graphviz.render_command(Path("out/model.dot"), "png") == [
        "dot",
        "-Tpng",
        str(Path("out/model.dot")),
        "-o",
        str(Path("out/model.png")),
    ]


def test_render_image_without_graphviz(monkeypatch, tmp_path):
    monkeypatch.setattr(graphviz.shutil, "which", lambda name: None)

    with pytest.raises(GraphvizError):
        graphviz.render_image(tmp_path / "model.dot", "png")


def test_create_sample_files(tmp_path):
    json_path, config_path = create_sample_files(str(tmp_path / "demo"))

    assert json_path == tmp_path / "demo_sample.json"
    assert config_path == tmp_path / "demo_config.yaml"
    assert '"HAS_PROFILE"' in json_path.read_text(encoding="utf-8")
    assert "rankdir: LR" in config_path.read_text(encoding="utf-8")
