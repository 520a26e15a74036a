"""Interactive course picker that sends a copied browser cookie."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable

import requests
from termcolor import colored

from coursepick.courses import (
    DEFAULT_PARAMS,
    Answer,
    build_add_body,
    course_list,
    format_course,
    iter_course_files,
    load_document,
    parse_answer,
)

ADD_URL = "http://jw.hitsz.edu.cn/Xsxk/addGouwuche"
COURSES_DIR = Path("./all_courses")
VERSION = "0.6.0"

_HEADERS = {
    "Accept": "*/*",
    "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8,en-GB;q=0.7,en-US;q=0.6",
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "Content-Type": "application/x-www-form-urlencoded; charset=UTF-8",
    "Origin": "http://jw.hitsz.edu.cn",
    "Pragma": "no-cache",
    "Referer": "http://jw.hitsz.edu.cn/Xsxk/query/1",
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/130.0.0.0 Safari/537.36 Edg/130.0.0.0"
    ),
    "X-Requested-With": "XMLHttpRequest",
}

_PROMPT = "Choose this? Yes: Y/y/YES/Yes/YeS/yeS/yEs/yeS/yes, else no."


def _headers(cookie: str) -> dict[str, str]:
    headers = dict(_HEADERS)
    headers["Cookie"] = cookie
    return headers


def curl_command(cookie: str, course_id: str) -> str:
    """Return a curl command line equivalent to the add-to-cart request."""
    lines = [f'curl "{ADD_URL}"']
    lines.extend(f"    -H '{key}: {value}'" for key, value in _headers(cookie).items() if key != "Cookie")
    # Keep the Cookie header where a browser export puts it: after Content-Type.
    cookie_line = f"    -H 'Cookie: {cookie}'"
    content_type_at = next(
        position for position, line in enumerate(lines) if "Content-Type:" in line
    )
    lines.insert(content_type_at + 1, cookie_line)
    lines.append(f"    --data-raw '{build_add_body(DEFAULT_PARAMS, course_id)}'")
    lines.append("    --insecure")
    return " \\\n".join(lines)


def add_to_cart(
    cookie: str, course_id: str, session: requests.Session | None = None
) -> str:
    """Send the add-to-cart request for ``course_id`` and return the reply text."""
    poster = session.post if session is not None else requests.post
    response = poster(
        ADD_URL,
        headers=_headers(cookie),
        data=build_add_body(DEFAULT_PARAMS, course_id),
    )
    return response.text


def _read_line(input_func: Callable[[], str]) -> str:
    try:
        return input_func()
    except EOFError:
        return ""


def choose_courses(
    courses: list,
    cookie: str,
    show_curl: bool,
    session: requests.Session | None = None,
    input_func: Callable[[], str] = input,
) -> None:
    """Ask about each course and add the accepted ones to the cart."""
    for course in courses:
        print(format_course(course, True))
        print(colored(_PROMPT, "green", attrs=["bold"]))
        answer = parse_answer(_read_line(input_func))

        if answer is not Answer.YES:
            print(colored("Skip this course.", "red", attrs=["bold"]))
            continue

        course_id = course["id"]
        if show_curl:
            shown_id = colored(course_id, "green", attrs=["bold"])
            print(
                "{}\n{}\n".format(
                    colored("request curl command:", "green", attrs=["bold"]),
                    curl_command(cookie, shown_id),
                )
            )
        reply = add_to_cart(cookie, course_id, session)
        print(f"Response: {reply}")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="coursepick-cookie",
        description="Add courses to the cart using a browser cookie.",
    )
    parser.add_argument("-c", "--cookie", required=True, help="cookie")
    parser.add_argument(
        "-s", "--show", action="store_true", help="show curl command"
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {VERSION}")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the picker over every course file in ``./all_courses``."""
    args = _parse_args(argv)

    if not COURSES_DIR.is_dir():
        print(f"The directory {COURSES_DIR} does not exist.", file=sys.stderr)

    try:
        with requests.Session() as session:
            for path in iter_course_files(COURSES_DIR):
                document = load_document(path)
                choose_courses(
                    course_list(document), args.cookie, args.show, session
                )
    except (OSError, ValueError, requests.RequestException) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())