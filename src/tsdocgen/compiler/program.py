"""Program: the set of source files reachable from the root files."""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from typing import Iterable

from tree_sitter import Parser

from ..core.config import CompilerOptions, DEFAULT_COMPILER_OPTIONS
from .binder import bind_source_file
from .checker import TypeChecker
from .source_file import SourceFile, get_language, language_variant_for

logger = logging.getLogger(__name__)

TS_EXTENSIONS = (".tsx", ".ts", ".d.ts")
JS_EXTENSIONS = (".jsx", ".js")


class Program:
    """Source files of one compilation, loaded and bound eagerly.

    Relative imports and re-exports are followed transitively; bare module
    specifiers are resolved through ``baseUrl``/``paths`` when configured
    and are otherwise treated as external packages.
    """

    def __init__(self, root_names: Iterable[str | Path], options: CompilerOptions | None = None) -> None:
        self.options = options or DEFAULT_COMPILER_OPTIONS
        self.root_names = [str(Path(name).resolve()) for name in root_names]
        self._files: dict[str, SourceFile] = {}
        self._resolutions: dict[tuple[str, str], str | None] = {}
        self._parsers: dict[str, Parser] = {}
        self._checker: TypeChecker | None = None

        queue: deque[str] = deque(self.root_names)
        while queue:
            file_name = queue.popleft()
            if file_name in self._files:
                continue
            source = self._load(file_name, is_root=file_name in self.root_names)
            if source is None:
                continue
            for specifier in source.module_specifiers:
                resolved = self.resolve_module_name(specifier, file_name)
                if resolved is not None and resolved not in self._files:
                    queue.append(resolved)

        logger.debug(f"Program created with {len(self._files)} source files")

    def _parser_for(self, file_name: str) -> Parser:
        variant = language_variant_for(file_name)
        if variant not in self._parsers:
            self._parsers[variant] = Parser(get_language(variant))
        return self._parsers[variant]

    def _load(self, file_name: str, is_root: bool) -> SourceFile | None:
        try:
            content = Path(file_name).read_bytes()
        except OSError as e:
            if is_root:
                logger.warning(f"Failed to read root file {file_name}: {e}")
            else:
                logger.warning(f"Failed to read dependency {file_name}: {e}")
            return None

        source = SourceFile.parse(file_name, content, self._parser_for(file_name))
        bind_source_file(source)
        self._files[file_name] = source
        return source

    # --- module resolution --------------------------------------------------

    def _extensions(self) -> tuple[str, ...]:
        return TS_EXTENSIONS + (JS_EXTENSIONS if self.options.allow_js else ())

    def _try_file(self, candidate: Path) -> str | None:
        extensions = self._extensions()
        if candidate.name.endswith(extensions) and candidate.is_file():
            return str(candidate.resolve())
        # './Button.js' may refer to Button.ts / Button.tsx
        if candidate.suffix in JS_EXTENSIONS:
            stem = candidate.with_suffix("")
            for ext in TS_EXTENSIONS:
                path = stem.parent / f"{stem.name}{ext}"
                if path.is_file():
                    return str(path.resolve())
        for ext in extensions:
            path = candidate.parent / f"{candidate.name}{ext}"
            if path.is_file():
                return str(path.resolve())
        if candidate.is_dir():
            for ext in extensions:
                path = candidate / f"index{ext}"
                if path.is_file():
                    return str(path.resolve())
        return None

    def _path_mapping_candidates(self, specifier: str) -> list[Path]:
        base_url = self.options.base_url
        if base_url is None:
            return []
        candidates: list[Path] = []
        for pattern, substitutions in self.options.paths.items():
            if "*" in pattern:
                prefix, _, suffix = pattern.partition("*")
                if specifier.startswith(prefix) and specifier.endswith(suffix) and len(specifier) >= len(prefix) + len(suffix):
                    matched = specifier[len(prefix) : len(specifier) - len(suffix)]
                    candidates.extend(base_url / sub.replace("*", matched) for sub in substitutions)
            elif pattern == specifier:
                candidates.extend(base_url / sub for sub in substitutions)
        candidates.append(base_url / specifier)
        return candidates

    def resolve_module_name(self, specifier: str, containing_file: str) -> str | None:
        """Resolve an import specifier to a file name, or None if external/missing."""
        key = (specifier, containing_file)
        if key in self._resolutions:
            return self._resolutions[key]

        if specifier.startswith(("./", "../")) or specifier in (".", ".."):
            candidates = [Path(containing_file).parent / specifier]
        elif specifier.startswith("/"):
            candidates = [Path(specifier)]
        else:
            candidates = self._path_mapping_candidates(specifier)

        resolved = None
        for candidate in candidates:
            resolved = self._try_file(candidate)
            if resolved is not None:
                break

        if resolved is None and candidates:
            logger.debug(f"Could not resolve module '{specifier}' from {containing_file}")
        self._resolutions[key] = resolved
        return resolved

    # --- public API ---------------------------------------------------------

    def get_source_file(self, file_name: str | Path) -> SourceFile | None:
        return self._files.get(str(Path(file_name).resolve()))

    def get_source_files(self) -> list[SourceFile]:
        return list(self._files.values())

    def get_source_file_for_module(self, specifier: str, containing_file: str) -> SourceFile | None:
        resolved = self.resolve_module_name(specifier, containing_file)
        return self._files.get(resolved) if resolved is not None else None

    def get_compiler_options(self) -> CompilerOptions:
        return self.options

    def get_type_checker(self) -> TypeChecker:
        """Get the program's type checker (created on first use)."""
        if self._checker is None:
            self._checker = TypeChecker(self)
        return self._checker


def create_program(root_names: Iterable[str | Path], options: CompilerOptions | None = None) -> Program:
    """Create a program for the given root files."""
    return Program(root_names, options)
