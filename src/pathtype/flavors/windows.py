"""Windows flavor: ``\\`` and ``/`` separators, drive and UNC volumes."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from pathtype import lexical
from pathtype.errors import EnvironmentLookupError
from pathtype.flavors.base import BaseFlavor


class WindowsFlavor(BaseFlavor):
    """Windows path rules.

    Both slash characters separate elements; ``\\`` is the canonical one.
    Pattern escaping is disabled because ``\\`` is a separator. Element
    comparison in ``rel`` ignores case.
    """

    name = "windows"
    sep = "\\"
    list_sep = ";"
    escaping = False
    case_sensitive = False

    def is_sep(self, c: str) -> bool:
        return c == "\\" or c == "/"

    def volume_name_len(self, path: str) -> int:
        """Length of a leading ``C:`` drive or ``\\\\host\\share`` UNC prefix."""
        if len(path) < 2:
            return 0
        c = path[0]
        if path[1] == ":" and ("a" <= c <= "z" or "A" <= c <= "Z"):
            return 2
        size = len(path)
        if (
            size >= 5
            and self.is_sep(path[0])
            and self.is_sep(path[1])
            and not self.is_sep(path[2])
            and path[2] != "."
        ):
            # \\host, then exactly one separator, then the share name.
            n = 3
            while n < size - 1:
                if self.is_sep(path[n]):
                    n += 1
                    if not self.is_sep(path[n]):
                        if path[n] == ".":
                            break
                        while n < size and not self.is_sep(path[n]):
                            n += 1
                        return n
                    break
                n += 1
        return 0

    def is_abs(self, path: str) -> bool:
        vol_len = self.volume_name_len(path)
        if vol_len == 0:
            return False
        if self.is_sep(path[0]) and self.is_sep(path[1]):
            return True
        rest = path[vol_len:]
        return rest != "" and self.is_sep(rest[0])

    def join(self, elems: Sequence[str]) -> str:
        out: list[str] = []
        last = ""
        for e in elems:
            if not out:
                pass
            elif self.is_sep(last):
                # Never manufacture a UNC prefix out of non-UNC elements.
                e = e.lstrip("\\/")
                if out == ["\\"] or out == ["/"]:
                    if e == "??" or (e.startswith("??") and self.is_sep(e[2])):
                        out.append(".\\")
            elif last == ":":
                # C: + f stays drive-relative: C:f
                pass
            else:
                out.append("\\")
                last = "\\"
            if e:
                out.append(e)
                last = e[-1]
        if not out:
            return ""
        return lexical.clean(self, "".join(out))

    def post_clean(self, rest: str, cleaned: str, vol_len: int) -> str:
        if vol_len != 0 or rest.startswith(cleaned):
            return cleaned
        # A ':' in the first element would turn the result into a drive path.
        for c in cleaned:
            if self.is_sep(c):
                break
            if c == ":":
                return "." + self.sep + cleaned
        # \??\ is a root local device prefix.
        if len(cleaned) >= 3 and self.is_sep(cleaned[0]) and cleaned[1:3] == "??":
            return self.sep + "." + cleaned
        return cleaned

    def split_list(self, value: str) -> list[str]:
        """Split on ``;`` outside double quotes, then drop the quotes."""
        if value == "":
            return []
        items: list[str] = []
        start = 0
        quoted = False
        for i, c in enumerate(value):
            if c == '"':
                quoted = not quoted
            elif c == self.list_sep and not quoted:
                items.append(value[start:i])
                start = i + 1
        items.append(value[start:])
        return [item.replace('"', "") for item in items]

    def temp_dir(self, environ: Mapping[str, str]) -> str:
        for var in ("TMP", "TEMP", "USERPROFILE"):
            value = environ.get(var, "")
            if value:
                return value
        return environ.get("SystemRoot") or "C:\\Windows"

    def home_dir(self, environ: Mapping[str, str]) -> str:
        return self._required(environ, "USERPROFILE", "%userprofile%")

    def cache_dir(self, environ: Mapping[str, str]) -> str:
        return self._required(environ, "LocalAppData", "%LocalAppData%")

    def config_dir(self, environ: Mapping[str, str]) -> str:
        return self._required(environ, "AppData", "%AppData%")

    def _required(self, environ: Mapping[str, str], var: str, label: str) -> str:
        value = environ.get(var, "")
        if value == "":
            raise EnvironmentLookupError(f"{label} is not defined")
        return value
