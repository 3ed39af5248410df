import pathlib as pl
import pathlib as pl
import pytest
import pytest
from src.renderer.shader_compiler import load_shader_source, resolve_includes
from src.renderer.shader_compiler import load_shader_source, resolve_includes

SHADER_DIR = pl.Path(__file__).resolve().parent.parent / "shaders"

class TestIncludes:
    def test_nested_include_resolves_relative_to_includer(self, tmp_path):
#   def test_nested_include_resolves_relative_to_includer(self, tmp_path):
        (tmp_path / "lib").mkdir()
#       (tmp_path / "lib").mkdir()
        (tmp_path / "lib" / "outer.glsl").write_text('#include "inner.glsl"\nfloat outer;\n')
#       (tmp_path / "lib" / "outer.glsl").write_text('#include "inner.glsl"\nfloat outer;\n')
        (tmp_path / "lib" / "inner.glsl").write_text("float inner;\n")
#       (tmp_path / "lib" / "inner.glsl").write_text("float inner;\n")
        resolved = resolve_includes('#include "lib/outer.glsl"\nvoid main() {}\n', base_path=tmp_path)
#       resolved = resolve_includes('#include "lib/outer.glsl"\nvoid main() {}\n', base_path=tmp_path)
        assert "float inner;" in resolved
#       assert "float inner;" in resolved
        assert "float outer;" in resolved
#       assert "float outer;" in resolved
        assert "#include" not in resolved
#       assert "#include" not in resolved

    def test_missing_include_leaves_marker(self, tmp_path, capsys):
#   def test_missing_include_leaves_marker(self, tmp_path, capsys):
        resolved = resolve_includes('#include "nowhere.glsl"\n', base_path=tmp_path)
#       resolved = resolve_includes('#include "nowhere.glsl"\n', base_path=tmp_path)
        assert "// ERROR: Include not found nowhere.glsl" in resolved
#       assert "// ERROR: Include not found nowhere.glsl" in resolved
        assert "Warning" in capsys.readouterr().out
#       assert "Warning" in capsys.readouterr().out

    def test_circular_include_raises(self, tmp_path):
#   def test_circular_include_raises(self, tmp_path):
        (tmp_path / "a.glsl").write_text('#include "b.glsl"\n')
#       (tmp_path / "a.glsl").write_text('#include "b.glsl"\n')
        (tmp_path / "b.glsl").write_text('#include "a.glsl"\n')
#       (tmp_path / "b.glsl").write_text('#include "a.glsl"\n')
        with pytest.raises(RuntimeError, match="Circular"):
#       with pytest.raises(RuntimeError, match="Circular"):
            load_shader_source(tmp_path / "a.glsl")
#           load_shader_source(tmp_path / "a.glsl")

    def test_missing_shader_raises(self, tmp_path):
#   def test_missing_shader_raises(self, tmp_path):
        with pytest.raises(RuntimeError):
#       with pytest.raises(RuntimeError):
            load_shader_source(tmp_path / "absent.glsl")
#           load_shader_source(tmp_path / "absent.glsl")

    @pytest.mark.parametrize("name", ["instanced_vs.glsl", "instanced_fs.glsl"])
#   @pytest.mark.parametrize("name", ["instanced_vs.glsl", "instanced_fs.glsl"])
    def test_scene_shaders_resolve(self, name):
#   def test_scene_shaders_resolve(self, name):
        source = load_shader_source(SHADER_DIR / name)
#       source = load_shader_source(SHADER_DIR / name)
        assert source.startswith("#version 330")
#       assert source.startswith("#version 330")
        assert "#include" not in source
#       assert "#include" not in source
        assert "LIGHT_DIRECTION" in source
#       assert "LIGHT_DIRECTION" in source
