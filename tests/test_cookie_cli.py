import io
import json

import pytest
import requests
import responses

from coursepick import cookie_cli
from coursepick.courses import DEFAULT_PARAMS, build_add_body

COOKIE = "token"
COURSE_A = {"id": "C001", "kcmc": "Math", "dgjsmc": "Li"}
COURSE_B = {"id": "C002", "kcmc": "Physics", "tyxmmc": "Lab"}


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


def _body(call):
    body = call.request.body
    return body.decode("utf-8") if isinstance(body, bytes) else body


def _answers(*lines):
    queue = list(lines)

    def read():
        if not queue:
            raise EOFError
        return queue.pop(0)

    return read


def test_curl_command_shape():
    command = cookie_cli.curl_command(COOKIE, "C001")
    assert command.startswith(f'curl "{cookie_cli.ADD_URL}"')
    assert command.endswith("--insecure")
    assert f"-H 'Cookie: {COOKIE}'" in command
    assert f"--data-raw '{build_add_body(DEFAULT_PARAMS, 'C001')}'" in command


def test_curl_command_cookie_follows_content_type():
    lines = cookie_cli.curl_command(COOKIE, "C001").split(" \\\n")
    content_type = next(i for i, line in enumerate(lines) if "Content-Type:" in line)
    assert lines[content_type + 1] == f"    -H 'Cookie: {COOKIE}'"
    assert len(lines) == 15


def test_add_to_cart_posts_body_and_cookie(rsps):
    rsps.add(responses.POST, cookie_cli.ADD_URL, body="ok")
    reply = cookie_cli.add_to_cart(COOKIE, "C001")
    assert reply == "ok"
    call = rsps.calls[0]
    assert _body(call) == build_add_body(DEFAULT_PARAMS, "C001")
    assert call.request.headers["Cookie"] == COOKIE
    assert call.request.headers["X-Requested-With"] == "XMLHttpRequest"


def test_add_to_cart_uses_given_session(rsps):
    rsps.add(responses.POST, cookie_cli.ADD_URL, body="done")
    with requests.Session() as session:
        assert cookie_cli.add_to_cart(COOKIE, "C002", session) == "done"
    assert "p_id=C002&" in _body(rsps.calls[0])


def test_choose_courses_adds_only_accepted(rsps, capsys):
    rsps.add(responses.POST, cookie_cli.ADD_URL, body="ok")
    cookie_cli.choose_courses(
        [COURSE_A, COURSE_B], COOKIE, False, input_func=_answers("YeS", "n")
    )
    assert len(rsps.calls) == 1
    assert "p_id=C001&" in _body(rsps.calls[0])
    out = capsys.readouterr().out
    assert "Response: ok" in out
    assert "Skip this course." in out
    assert "request curl command:" not in out


def test_choose_courses_select_counts_as_skip(rsps, capsys):
    cookie_cli.choose_courses([COURSE_A], COOKIE, False, input_func=_answers("s"))
    assert len(rsps.calls) == 0
    assert "Skip this course." in capsys.readouterr().out


def test_choose_courses_shows_curl(rsps, capsys):
    rsps.add(responses.POST, cookie_cli.ADD_URL, body="ok")
    cookie_cli.choose_courses([COURSE_A], COOKIE, True, input_func=_answers("y"))
    out = capsys.readouterr().out
    assert "request curl command:" in out
    assert "--insecure" in out


def test_choose_courses_end_of_input_skips(rsps, capsys):
    cookie_cli.choose_courses([COURSE_A, COURSE_B], COOKIE, False, input_func=_answers())
    assert len(rsps.calls) == 0
    assert capsys.readouterr().out.count("Skip this course.") == 2


def test_main_reads_all_courses(rsps, tmp_path, monkeypatch):
    folder = tmp_path / "all_courses"
    folder.mkdir()
    (folder / "a.json").write_text(
        json.dumps({"kxrwList": {"list": [COURSE_A]}}), encoding="utf-8"
    )
    (folder / "notes.txt").write_text("ignored", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO("y\n"))
    rsps.add(responses.POST, cookie_cli.ADD_URL, body="ok")

    assert cookie_cli.main(["-c", COOKIE]) == 0
    assert len(rsps.calls) == 1
    assert rsps.calls[0].request.headers["Cookie"] == COOKIE


def test_main_missing_directory(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert cookie_cli.main(["--cookie", COOKIE]) == 1
    assert "does not exist" in capsys.readouterr().err


def test_main_requires_cookie():
    with pytest.raises(SystemExit):
        cookie_cli.main([])