import pathlib as pl
import pathlib as pl
import re
import re
import typing
import typing

INCLUDE_PATTERN: re.Pattern[str] = re.compile(pattern=r'^\s*#include\s+"([^"]+)"', flags=re.MULTILINE)

def resolve_includes(source: str, base_path: pl.Path, _stack: tuple[pl.Path, ...] = ()) -> str:
    """
    Recursively resolves #include "filename" directives in GLSL source code.
#   Recursively resolves #include "filename" directives in GLSL source code.
    Standard GLSL does not support #include, so this pre-processor manually inserts the code.
#   Standard GLSL does not support #include, so this pre-processor manually inserts the code.
    A file that (directly or indirectly) includes itself raises RuntimeError.
#   A file that (directly or indirectly) includes itself raises RuntimeError.
    """
    def replace(match: re.Match[str]) -> str:
#   def replace(match: re.Match[str]) -> str:
        filename: str | typing.Any = match.group(1)
#       filename: str | typing.Any = match.group(1)
        included_path: pl.Path = (base_path / filename).resolve(strict=False)
#       included_path: pl.Path = (base_path / filename).resolve(strict=False)

        if not included_path.exists():
#       if not included_path.exists():
            # Leave a marker so the GLSL compiler error points at the missing include.
#           # Leave a marker so the GLSL compiler error points at the missing include.
            print(f"Warning: Included file not found: {included_path}")
#           print(f"Warning: Included file not found: {included_path}")
            return f"// ERROR: Include not found {filename}"
#           return f"// ERROR: Include not found {filename}"
        if included_path in _stack:
#       if included_path in _stack:
            chain: str = " -> ".join(path.name for path in (*_stack, included_path))
#           chain: str = " -> ".join(path.name for path in (*_stack, included_path))
            raise RuntimeError(f"Circular shader include: {chain}")
#           raise RuntimeError(f"Circular shader include: {chain}")

        included_content: str = included_path.read_text(encoding="utf-8")
#       included_content: str = included_path.read_text(encoding="utf-8")
        # Nested includes resolve relative to the directory of the file that contains them.
#       # Nested includes resolve relative to the directory of the file that contains them.
        return resolve_includes(source=included_content, base_path=included_path.parent, _stack=(*_stack, included_path))
#       return resolve_includes(source=included_content, base_path=included_path.parent, _stack=(*_stack, included_path))

    return INCLUDE_PATTERN.sub(replace, source)
#   return INCLUDE_PATTERN.sub(replace, source)

def load_shader_source(path: pl.Path) -> str:
    resolved_path: pl.Path = path.resolve(strict=False)
#   resolved_path: pl.Path = path.resolve(strict=False)
    if not resolved_path.exists():
#   if not resolved_path.exists():
        raise RuntimeError(f"Shader source not found: {resolved_path}")
#       raise RuntimeError(f"Shader source not found: {resolved_path}")
    return resolve_includes(
#   return resolve_includes(
        source=resolved_path.read_text(encoding="utf-8"),
#       source=resolved_path.read_text(encoding="utf-8"),
        base_path=resolved_path.parent,
#       base_path=resolved_path.parent,
        _stack=(resolved_path,),
#       _stack=(resolved_path,),
    )
#   )
