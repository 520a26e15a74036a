"""Course documents, the add-to-cart request body and course listing."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Iterator

from termcolor import colored


@dataclass(frozen=True)
class SelectionParams:
    """Term and selection-method values sent with every add-to-cart request."""

    pylx: str
    sfgldjr: str
    xn: str
    xq: str
    xnxq: str
    dqxn: str
    dqxq: str
    dqxnxq: str
    xkfsdm: str

    @classmethod
    def from_document(cls, document: Any) -> "SelectionParams":
        """Read the parameters from the ``xsxkPage`` section of a course document."""
        page = document.get("xsxkPage") if isinstance(document, dict) else None
        if not isinstance(page, dict):
            page = {}
        values = {}
        for field in fields(cls):
            value = page.get(f"p_{field.name}")
            if not isinstance(value, str):
                raise ValueError(_MISSING_MESSAGES[field.name])
            values[field.name] = value
        return cls(**values)


_MISSING_MESSAGES = {
    "pylx": "no semister specified.",
    "sfgldjr": "no semister specified.",
    "xn": "no year specified.",
    "xq": "no semister specified.",
    "xnxq": "no year_semister specified.",
    "dqxn": "no semister specified.",
    "dqxq": "no semister specified.",
    "dqxnxq": "no ...dqxnxq specified.",
    "xkfsdm": "no method specified.",
}

DEFAULT_PARAMS = SelectionParams(
    pylx="1",
    sfgldjr="0",
    xn="2024-2025",
    xq="2",
    xnxq="2024-20252",
    dqxn="2024-2025",
    dqxq="1",
    dqxnxq="2024-20251",
    xkfsdm="xx-b-b",
)


def build_add_body(params: SelectionParams, course_id: str) -> str:
    """Return the form body that adds ``course_id`` to the cart."""
    pairs = [
        ("cxsfmt", "0"),
        ("p_pylx", params.pylx),
        ("mxpylx", "1"),
        ("p_sfgldjr", params.sfgldjr),
        ("p_sfredis", "0"),
        ("p_sfsyxkgwc", "0"),
        ("p_xktjz", "rwtjzyx"),
        ("p_chaxunxh", ""),
        ("p_gjz", ""),
        ("p_skjs", ""),
        ("p_xn", params.xn),
        ("p_xq", params.xq),
        ("p_xnxq", params.xnxq),
        ("p_dqxn", params.dqxn),
        ("p_dqxq", params.dqxq),
        ("p_dqxnxq", params.dqxnxq),
        ("p_xkfsdm", params.xkfsdm),
        ("p_xiaoqu", ""),
        ("p_kkyx", ""),
        ("p_kclb", ""),
        ("p_xkxs", ""),
        ("p_dyc", ""),
        ("p_kkxnxq", ""),
        ("p_id", course_id),
        ("p_sfhlctkc", "0"),
        ("p_sfhllrlkc", "0"),
        ("p_kxsj_xqj", ""),
        ("p_kxsj_ksjc", ""),
        ("p_kxsj_jsjc", ""),
        ("p_kcdm_js", ""),
        ("p_kcdm_cxrw", ""),
        ("p_kc_gjz", ""),
        ("p_xzcxtjz_nj", ""),
        ("p_xzcxtjz_yx", ""),
        ("p_xzcxtjz_zy", ""),
        ("p_xzcxtjz_zyfx", ""),
        ("p_xzcxtjz_bj", ""),
        ("p_sfxsgwckb", "1"),
        ("p_skyy", ""),
        ("p_chaxunxkfsdm", ""),
        ("pageNum", "1"),
        ("pageSize", "18"),
    ]
    return "&".join(f"{key}={value}" for key, value in pairs)


def course_list(document: Any) -> list:
    """Return the course entries of ``kxrwList.list``, or an empty list."""
    if not isinstance(document, dict):
        return []
    section = document.get("kxrwList")
    if not isinstance(section, dict):
        return []
    courses = section.get("list")
    return courses if isinstance(courses, list) else []


def _required(course: Any, key: str) -> str:
    value = course.get(key) if isinstance(course, dict) else None
    if not isinstance(value, str):
        raise ValueError(f"course has no string field {key!r}")
    return value


def _optional(course: Any, key: str) -> str:
    value = course.get(key) if isinstance(course, dict) else None
    return value if isinstance(value, str) else ""


def format_course(course: Any, leading_newline: bool) -> str:
    """Return the one-line, coloured description of a course."""
    line = "Course id: {}, Course name: {}, Course teacher: {} {}".format(
        colored(_required(course, "id"), "green", attrs=["bold"]),
        colored(_required(course, "kcmc"), "magenta", attrs=["bold"]),
        colored(_optional(course, "dgjsmc"), "blue", attrs=["bold"]),
        colored(_optional(course, "tyxmmc"), "blue", attrs=["bold"]),
    )
    return "\n\n" + line if leading_newline else line


def list_all_courses(courses: list) -> None:
    """Print one line for every course."""
    for course in courses:
        print(format_course(course, False))


def iter_course_files(directory: str | Path) -> Iterator[Path]:
    """Yield the ``.json`` files directly inside ``directory``, sorted by name."""
    entries = sorted(Path(directory).iterdir())
    yield from (path for path in entries if path.is_file() and path.suffix == ".json")


def load_document(path: str | Path) -> Any:
    """Load a JSON course document."""
    with open(path, encoding="utf-8") as handle:
        return json.load(handle)


class Answer(enum.Enum):
    """What the user wants done with a course."""

    YES = "yes"
    SELECT = "select"
    SKIP = "skip"


def parse_answer(text: str) -> Answer:
    """Interpret a line typed at the course prompt."""
    answer = text.strip().lower()
    if answer in ("y", "yes"):
        return Answer.YES
    if answer in ("s", "select"):
        return Answer.SELECT
    return Answer.SKIP