#!/usr/bin/env python3
"""
Movie Dataset Query Tool (CLI)
Python 3.12

Implements:
  1) Show movies released in a specified year
  2) Show the highest rated movie for each year
  3) Show title and release year of all movies in a specific language
  4) Exit

Data & Parsing Rules:
- Movies file rows:   title,year,languages,rating
  * The first line is a header and is ignored (no validation).
  * Blank lines are skipped.
  * A row is split on its first three commas; the rating runs to end-of-line.
  * Abort for: fewer than four fields, empty title, non-integer year,
    non-numeric or non-finite rating (NaN/inf).
  * Missing or unreadable file aborts the load as well.
  * No partial loads: the first bad row aborts the whole file.

- Titles are kept exactly as written (surrounding spaces included).
- Year must be ASCII digits with an optional sign; rating must be an ASCII
  decimal with an optional exponent ("2_000", "8_4" or non-ASCII digits abort).

- Languages are stored raw (e.g. "[English;French]") and split on any of
  '[', ';', ']' into case-insensitive (casefolded) tokens. Whitespace around a
  token is trimmed, so "[English; French]" matches "French"; inner spaces are
  kept ("Brazilian Portuguese" is one token). Empty tokens are dropped, so
  "[]" matches no language.

- Top rated per year: a movie wins its year when no other movie of that year
  has a higher rating, or the same rating and a smaller title. Winners are
  listed in file order.

CLI:
- Usage: movie_query.py <movies file>
- Always accept q/Q to quit at the menu.
- Numeric menu inputs may include a trailing period like "1." (treated as 1).
- Display ratings to one decimal.
"""

from __future__ import annotations

import math
import re
import sys
from typing import Dict, FrozenSet, Iterable, List, NamedTuple, Optional, Tuple, Union

# =========================
# Constants
# =========================

FIELD_COUNT = 4
LANGUAGE_SEPARATORS = "[;]"
_LANGUAGE_SPLIT_RE = re.compile("[" + re.escape(LANGUAGE_SEPARATORS) + "]")

# ASCII only: int()/float() would also take "2_000" or non-ASCII digits
_YEAR_RE = re.compile(r'^\s*[+-]?[0-9]+\s*\Z')
_RATING_RE = re.compile(r'^\s*[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\s*\Z')


# =========================
# Records
# =========================

class MovieRecord(NamedTuple):
    """One parsed movie row. Immutable once built."""
    title: str
    year: int
    languages: str                  # raw field, e.g. "[English;French]"
    rating: float
    language_tokens: FrozenSet[str] = frozenset()   # casefolded tokens of `languages`


class NotFoundResult:
    """
    Returned by a query whose filter matched no records.
    Falsy, so callers can write `if not result:`; still distinct from an empty list.
    """

    __slots__ = ("query", "value")

    def __init__(self, query: str, value: Union[int, str]) -> None:
        self.query = query
        self.value = value

    def __bool__(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NotFoundResult):
            return NotImplemented
        return (self.query, self.value) == (other.query, other.value)

    def __hash__(self) -> int:
        return hash((self.query, self.value))

    def __repr__(self) -> str:
        return f"NotFoundResult(query={self.query!r}, value={self.value!r})"


# =========================
# Global session datastore
# =========================

MOVIES: List[MovieRecord] = []       # loaded dataset, file order


def _clear_globals() -> None:
    """Clear the session datastore."""
    MOVIES.clear()


# =========================
# Errors
# =========================

class LoadError(Exception):
    """Raised when a load operation must be aborted."""
    pass


class ParseError(LoadError):
    """A data line could not be decomposed into title, year, languages, rating."""
    pass


class SourceError(LoadError, OSError):
    """The movies file is missing or cannot be read."""
    pass


# =========================
# Parsing & Loading
# =========================

def split_languages(raw: str) -> FrozenSet[str]:
    """
    Split a raw languages field on '[', ';' and ']' into casefolded tokens.
    "[English;French]" -> {"english", "french"}; "[]" -> empty set.
    """
    tokens = (tok.strip().casefold() for tok in _LANGUAGE_SPLIT_RE.split(raw))
    return frozenset(tok for tok in tokens if tok)


def parse_movie_line(line: str, line_no: int = 0) -> MovieRecord:
    """
    Parse one data line: title,year,languages,rating
    Raises ParseError for malformed rows.
    """
    where = f"line {line_no}" if line_no else "line"
    parts = line.rstrip("\r\n").split(",", FIELD_COUNT - 1)
    if len(parts) != FIELD_COUNT:
        raise ParseError(f"Movies file malformed at {where}: expected 4 fields (title,year,languages,rating).")

    title_s, year_s, languages, rating_s = parts
    if not title_s.strip():
        raise ParseError(f"Movies file malformed at {where}: empty title.")
    if not _YEAR_RE.match(year_s):
        raise ParseError(f"Movies file malformed at {where}: year is not an integer.")
    if not _RATING_RE.match(rating_s):
        raise ParseError(f"Movies file malformed at {where}: rating is not numeric.")
    year = int(year_s)
    rating = float(rating_s)
    # e.g. "1e999"
    if not math.isfinite(rating):
        raise ParseError(f"Movies file malformed at {where}: rating must be finite (no NaN/inf).")

    return MovieRecord(title_s, year, languages, rating, split_languages(languages))


def load_movies_from_lines(lines: Iterable[str]) -> List[MovieRecord]:
    """
    Build the dataset from raw lines. The first line is the header and is discarded.
    Blank lines are skipped; the first malformed line raises ParseError and nothing is returned.
    """
    movies: List[MovieRecord] = []
    it = iter(lines)
    if next(it, None) is None:
        return movies

    # header is line 1
    for i, raw in enumerate(it, start=2):
        if not raw.strip():
            continue
        movies.append(parse_movie_line(raw, i))
    return movies


def load_movies(path: str) -> List[MovieRecord]:
    """
    Load the movies file at `path`.
    Raises SourceError if the file cannot be opened or read, ParseError on the first bad row.
    """
    try:
        # BOM tolerant
        with open(path, "r", encoding="utf-8-sig") as f:
            return load_movies_from_lines(f)
    except UnicodeDecodeError as e:
        raise SourceError(f"Movies file could not be decoded as UTF-8: {path}") from e
    except FileNotFoundError as e:
        raise SourceError(f"Movies file does not exist: {path}") from e
    except OSError as e:
        raise SourceError(f"Movies file could not be read: {path} ({e.strerror or e})") from e


def count_movies(records: List[MovieRecord]) -> int:
    """Number of loaded records."""
    return len(records)


# =========================
# Queries
# =========================

def movies_by_year(records: Iterable[MovieRecord], year: int) -> Union[List[str], NotFoundResult]:
    """Titles of movies released in `year`, in file order."""
    titles = [m.title for m in records if m.year == year]
    if not titles:
        return NotFoundResult("year", year)
    return titles


def _top_key(movie: MovieRecord) -> Tuple[float, str]:
    """
    Ranking key within a year; smaller is better:
      1) rating desc
      2) title A-Z (plain string order)
    """
    return (-movie.rating, movie.title)


def top_rated_per_year(records: Iterable[MovieRecord]) -> List[Tuple[int, float, str]]:
    """
    (year, rating, title) of the top rated movie of every year, in file order of the winners.
    Equal ratings are broken by the smaller title. Rows identical in year, rating and title all win.
    """
    records = list(records)
    best: Dict[int, Tuple[float, str]] = {}
    for m in records:
        key = _top_key(m)
        cur = best.get(m.year)
        if cur is None or key < cur:
            best[m.year] = key

    return [(m.year, m.rating, m.title) for m in records if _top_key(m) == best[m.year]]


def movies_by_language(records: Iterable[MovieRecord], lang: str) -> Union[List[Tuple[int, str]], NotFoundResult]:
    """(year, title) of movies available in `lang` (case-insensitive), in file order."""
    wanted = lang.strip().casefold()
    matches = [(m.year, m.title) for m in records if wanted in m.language_tokens]
    if not matches:
        return NotFoundResult("language", lang)
    return matches


# =========================
# Utility / Helpers
# =========================

def _strip_int_like(s: str) -> Optional[int]:
    """
    Accept numeric inputs like "1" or "1." and return int(1). Returns None if not valid.
    """
    s = s.strip()
    if s.endswith("."):
        s = s[:-1]
    if s.isdigit() or (s and s[0] in "+-" and s[1:].isdigit()):
        try:
            return int(s)
        except ValueError:
            return None
    return None


def _fmt_rating(x: float) -> str:
    """Format ratings to one decimal."""
    return f"{x:.1f}"


# =========================
# CLI Feature Implementations
# =========================

def feature_movies_by_year() -> None:
    """
    Prompt for a year and list the titles released in it.
    """
    s = input("Enter the year for which you want to see movies: ")
    year = _strip_int_like(s)
    if year is None:
        print("Invalid year. Please enter a whole number.\n")
        return

    result = movies_by_year(MOVIES, year)
    if not result:
        print(f"No data about movies released in the year {year}")
    else:
        for title in result:
            print(title)
    print()


def feature_top_rated_per_year() -> None:
    """
    List the highest rated movie of every year.
    """
    for year, rating, title in top_rated_per_year(MOVIES):
        print(f"{year}, {_fmt_rating(rating)}, {title}")
    print()


def feature_movies_by_language() -> None:
    """
    Prompt for a language and list year and title of every movie available in it.
    """
    lang = input("Enter the language for which you want to see movies: ").strip()
    result = movies_by_language(MOVIES, lang)
    if not result:
        print(f"No data about movies released in {lang}")
    else:
        for year, title in result:
            print(f"{year} {title}")
    print()


# =========================
# Main Menu
# =========================

def main_menu() -> None:
    """
    Display the main menu and route to chosen features until the user exits.
    """
    while True:
        print("1. Show movies released in the specified year")
        print("2. Show highest rated movie for each year")
        print("3. Show the title and year of release of all movies in a specific language")
        print("4. Exit from the program")
        print()

        try:
            choice = input("Enter a choice from 1 to 4: ").strip()
            if choice.lower() == "q":
                return

            num = _strip_int_like(choice)
            if num == 1:
                feature_movies_by_year()
            elif num == 2:
                feature_top_rated_per_year()
            elif num == 3:
                feature_movies_by_language()
            elif num == 4:
                return
            else:
                print("You entered an incorrect choice. Try again.\n")
        except EOFError:
            print()
            return


# =========================
# Entry Point
# =========================

def main(argv: Optional[List[str]] = None) -> int:
    """
    Program entry point. Loads the movies file named on the command line, then shows the main menu.
    Returns the process exit status.
    """
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("You must provide the name of the file to process")
        print("Example usage: movie-query movies_sample.csv")
        return 1

    path = args[0]
    _clear_globals()
    try:
        MOVIES.extend(load_movies(path))
    except LoadError as e:
        print(f"[Error] {e}")
        return 1

    print(f"Processed file {path} and parsed data for {count_movies(MOVIES)} movies\n")
    main_menu()
    return 0


if __name__ == "__main__":
    sys.exit(main())
