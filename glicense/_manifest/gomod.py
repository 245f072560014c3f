"""Parser for go.mod files (Go modules)."""

import json
import re
from pathlib import Path
from typing import List, Optional, Tuple

from glicense.exceptions import ManifestNotFoundError, ManifestParseError
from glicense.logging_config import logger

from .models import ModuleVersion

# Directives accepted by the go command. Anything else is a syntax error.
DIRECTIVES = frozenset({"module", "go", "toolchain", "godebug", "require", "exclude", "replace", "retract"})

# Directives that may be written as a parenthesised block.
BLOCK_DIRECTIVES = frozenset({"godebug", "require", "exclude", "replace", "retract"})

_VERSION_PATTERN = re.compile(r"^v\d+(\.\d+)*")


def _tokenize(line: str, lineno: int, filename: str) -> Tuple[List[str], str]:
    """Split one go.mod line into tokens and its trailing comment.

    Returns:
        (tokens, comment) where comment is the text after ``//`` with
        surrounding whitespace stripped, or "" when the line has none.
    """
    tokens: List[str] = []
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if ch.isspace():
            i += 1
            continue
        if line.startswith("//", i):
            return tokens, line[i + 2 :].strip()
        if ch in "()":
            tokens.append(ch)
            i += 1
            continue
        if ch == '"':
            j = i + 1
            while j < n and line[j] != '"':
                j += 2 if line[j] == "\\" else 1
            if j >= n:
                raise ManifestParseError("unterminated quoted string", filename, lineno)
            try:
                tokens.append(json.loads(line[i : j + 1]))
            except ValueError:
                raise ManifestParseError(f"invalid quoted string {line[i : j + 1]}", filename, lineno)
            i = j + 1
            continue
        if ch == "`":
            j = line.find("`", i + 1)
            if j == -1:
                raise ManifestParseError("unterminated raw string", filename, lineno)
            tokens.append(line[i + 1 : j])
            i = j + 1
            continue

        j = i
        while j < n and not line[j].isspace() and line[j] not in '()"`' and not line.startswith("//", j):
            j += 1
        tokens.append(line[i:j])
        i = j

    return tokens, ""


def _is_indirect(comment: str) -> bool:
    """Check for the ``// indirect`` marker written by the go command."""
    if not comment:
        return False
    first = comment.split(";", 1)[0].strip()
    return first == "indirect"


class GoModParser:
    """Parser for go.mod files.

    go.mod is line oriented. A directive is either a single line:
        require github.com/pkg/errors v0.9.1

    or a block:
        require (
            github.com/pkg/errors v0.9.1
            golang.org/x/sys v0.1.0 // indirect
        )

    Only the require entries are returned; other directives are checked
    for shape so that a malformed file is reported instead of half read.
    """

    def parse(self, manifest_path: Path) -> List[ModuleVersion]:
        """Parse go.mod and return its requirements.

        Args:
            manifest_path: Path to go.mod

        Returns:
            Requirements in file order, indirect ones included and flagged.

        Raises:
            ManifestNotFoundError: If the file does not exist.
            ManifestParseError: If the file cannot be read or parsed.
        """
        try:
            content = manifest_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise ManifestNotFoundError(f"no go.mod file present in {manifest_path.parent}")
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestParseError(f"cannot read file: {e}", manifest_path.name)

        return self.parse_text(content, manifest_path.name)

    def parse_text(self, content: str, filename: str = "go.mod") -> List[ModuleVersion]:
        """Parse go.mod content."""
        modules: List[ModuleVersion] = []
        block_verb: Optional[str] = None
        block_start = 0

        for lineno, raw in enumerate(content.splitlines(), start=1):
            tokens, comment = _tokenize(raw, lineno, filename)
            if not tokens:
                continue

            if block_verb is not None:
                if tokens == [")"]:
                    block_verb = None
                    continue
                if "(" in tokens or ")" in tokens:
                    raise ManifestParseError(f"unexpected parenthesis in {block_verb} block", filename, lineno)
                self._directive(block_verb, tokens, comment, filename, lineno, modules)
                continue

            verb, args = tokens[0], tokens[1:]
            if verb in ("(", ")"):
                raise ManifestParseError(f"unexpected '{verb}'", filename, lineno)
            if verb not in DIRECTIVES:
                raise ManifestParseError(f"unknown directive: {verb}", filename, lineno)

            if args and args[0] == "(":
                if verb not in BLOCK_DIRECTIVES:
                    raise ManifestParseError(f"{verb} does not accept a block", filename, lineno)
                if args == ["("]:
                    block_verb = verb
                    block_start = lineno
                    continue
                if args == ["(", ")"]:
                    continue
                raise ManifestParseError(f"malformed {verb} block opening", filename, lineno)

            if "(" in args or ")" in args:
                raise ManifestParseError("unexpected parenthesis", filename, lineno)

            self._directive(verb, args, comment, filename, lineno, modules)

        if block_verb is not None:
            raise ManifestParseError(f"unterminated {block_verb} block", filename, block_start)

        logger.debug(f"Parsed {len(modules)} requirements from {filename}")
        return modules

    def _directive(
        self,
        verb: str,
        args: List[str],
        comment: str,
        filename: str,
        lineno: int,
        modules: List[ModuleVersion],
    ) -> None:
        if verb == "require":
            if len(args) != 2:
                raise ManifestParseError("usage: require module/path v1.2.3", filename, lineno)
            path, version = args
            self._check_version(version, filename, lineno)
            modules.append(ModuleVersion(path=path, version=version, indirect=_is_indirect(comment)))
        elif verb in ("module", "go", "toolchain"):
            if len(args) != 1:
                raise ManifestParseError(f"usage: {verb} takes exactly one argument", filename, lineno)
        elif verb == "godebug":
            if len(args) != 1 or "=" not in args[0]:
                raise ManifestParseError("usage: godebug key=value", filename, lineno)
        elif verb == "exclude":
            if len(args) != 2:
                raise ManifestParseError("usage: exclude module/path v1.2.3", filename, lineno)
            self._check_version(args[1], filename, lineno)
        elif verb == "replace":
            if "=>" not in args:
                raise ManifestParseError("usage: replace module/path [v1.2.3] => other/module v1.4", filename, lineno)
            arrow = args.index("=>")
            old, new = args[:arrow], args[arrow + 1 :]
            if len(old) not in (1, 2) or len(new) not in (1, 2):
                raise ManifestParseError("usage: replace module/path [v1.2.3] => other/module v1.4", filename, lineno)
        elif verb == "retract":
            if not args:
                raise ManifestParseError("usage: retract v1.2.3 or retract [v1.0.0, v1.1.0]", filename, lineno)

    @staticmethod
    def _check_version(version: str, filename: str, lineno: int) -> None:
        if not _VERSION_PATTERN.match(version):
            raise ManifestParseError(f"invalid version {version!r}: must be of the form v1.2.3", filename, lineno)
