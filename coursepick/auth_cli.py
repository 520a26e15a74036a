"""Course picker that logs in with a username and password."""

from __future__ import annotations

import argparse
import copy
import json
import sys
import time
from pathlib import Path
from typing import Any, Callable

import requests
from termcolor import colored

from coursepick.courses import (
    Answer,
    SelectionParams,
    build_add_body,
    course_list,
    format_course,
    iter_course_files,
    list_all_courses,
    load_document,
    parse_answer,
)
from coursepick.login import AuthenticationError, authenticate

ADD_URL = "https://jw-hitsz-edu-cn.hitsz.edu.cn/Xsxk/addGouwuche"
DEFAULT_FOLDER = "./all_courses"
PRE_SELECT_FILE = Path("pre_select.json")
MAX_RETRIES = 3
RETRY_DELAY = 3
PRE_SELECT_DELAY = 2
VERSION = "0.6.0"

_HEADERS = {
    "Connection": "keep-alive",
    "Content-Type": "application/x-www-form-urlencoded; charset=UTF-8",
}


def add_to_cart(
    session: requests.Session, course_id: str, params: SelectionParams
) -> str:
    """Send the add-to-cart request for ``course_id`` and return the reply text."""
    response = session.post(
        ADD_URL, headers=_HEADERS, data=build_add_body(params, course_id)
    )
    return response.text


def _add_with_retries(
    session: requests.Session,
    course_id: str,
    params: SelectionParams,
    sleep: Callable[[float], Any],
) -> None:
    for attempt in range(1, MAX_RETRIES + 1):
        try:
            reply = add_to_cart(session, course_id, params)
        except requests.RequestException as error:
            label = colored("Error:", "red", attrs=["bold"])
            if attempt < MAX_RETRIES:
                print(f"{label} {error} (Attempt {attempt}/{MAX_RETRIES})")
                sleep(RETRY_DELAY)
            else:
                print(f"{label} {error} (Max retries reached)")
        else:
            print(f"{colored('Success:', 'green', attrs=['bold'])} {reply}")
            return


def choose_courses(
    courses: list,
    session: requests.Session,
    document: Any,
    pre_select: Any,
    use_pre_select: bool,
    input_func: Callable[[], str] = input,
    sleep: Callable[[float], Any] | None = None,
) -> None:
    """Add courses to the cart, asking first unless ``use_pre_select`` is set.

    Courses the user marks with ``s``/``select`` are appended to the
    ``kxrwList.list`` of ``pre_select``. End of input raises ``EOFError``.
    """
    pause = sleep if sleep is not None else time.sleep

    for course in courses:
        print(format_course(course, True))

        if use_pre_select:
            answer = Answer.YES
        else:
            print(
                "{} {}".format(
                    colored("Choose this? Yes: Y/y/yes, else no.", "green", attrs=["bold"]),
                    colored("Input Select/S/s to add to pre_select.json", "blue", attrs=["bold"]),
                )
            )
            answer = parse_answer(input_func())

        if answer is Answer.YES:
            params = SelectionParams.from_document(document)
            _add_with_retries(session, course["id"], params, pause)
            if use_pre_select:
                pause(PRE_SELECT_DELAY)
        elif answer is Answer.SELECT:
            pre_select["kxrwList"]["list"].append(course)
            print(colored("selected", "blue", attrs=["bold"]))
        else:
            print(colored("Skip this course.", "red", attrs=["bold"]))


def _emptied_copy(document: Any) -> Any:
    emptied = copy.deepcopy(document)
    try:
        selected = emptied["kxrwList"]["list"]
    except (KeyError, TypeError) as error:
        raise ValueError("course document has no kxrwList.list") from error
    if not isinstance(selected, list):
        raise ValueError("course document has no kxrwList.list")
    selected.clear()
    return emptied


def _save_pre_select(pre_select: Any) -> None:
    with open(PRE_SELECT_FILE, "w", encoding="utf-8") as handle:
        json.dump(pre_select, handle, ensure_ascii=False, separators=(",", ":"))


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="coursepick",
        description="Log in and add courses to the cart.",
    )
    parser.add_argument("-u", "--username", required=True, help="user name")
    parser.add_argument("-p", "--password", required=True, help="password")
    parser.add_argument(
        "-s",
        "--selected-json",
        action="store_true",
        help="add every course of ./pre_select.json without asking",
    )
    parser.add_argument(
        "-f",
        "--folder-addr",
        default=None,
        help="folder holding the course JSON files, default all_courses",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {VERSION}")
    return parser.parse_args(argv)


def _run_pre_selected(session: requests.Session) -> None:
    document = load_document(PRE_SELECT_FILE)
    courses = course_list(document)
    list_all_courses(courses)
    choose_courses(courses, session, document, None, True)


def _run_interactive(session: requests.Session, courses_dir: Path) -> None:
    pre_select: Any = None
    for path in iter_course_files(courses_dir):
        document = load_document(path)
        pre_select = _emptied_copy(document)
        list_all_courses(course_list(document))

    while True:
        for path in iter_course_files(courses_dir):
            document = load_document(path)
            choose_courses(course_list(document), session, document, pre_select, False)

        _save_pre_select(pre_select)
        print(colored("pre_select.json saved.", "magenta", attrs=["bold"]))
        print(colored("A NEW TERM BEGINS.\n----\n----\n----", "magenta", attrs=["bold"]))


def main(argv: list[str] | None = None) -> int:
    """Log in, then pick courses interactively or from ``pre_select.json``."""
    args = _parse_args(argv)
    courses_dir = Path(args.folder_addr or DEFAULT_FOLDER)

    if not courses_dir.is_dir():
        print(f"The directory {courses_dir} does not exist.", file=sys.stderr)

    with requests.Session() as session:
        print(colored("Authenticating...", "blue", attrs=["bold"]))
        try:
            authenticate(session, args.username, args.password)
            if args.selected_json:
                _run_pre_selected(session)
            else:
                _run_interactive(session, courses_dir)
        except AuthenticationError as error:
            print(colored(str(error), "red", attrs=["bold"]), file=sys.stderr)
            return 1
        except EOFError:
            return 0
        except (OSError, ValueError, requests.RequestException) as error:
            print(f"Error: {error}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())