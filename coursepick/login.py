"""Login to the central authentication service."""

from __future__ import annotations

import requests
from bs4 import BeautifulSoup

from coursepick.crypto import aes_encrypt_password

LOGIN_URL = (
    "https://ids.hit.edu.cn/authserver/login"
    "?service=http%3A%2F%2Fjw-hitsz-edu-cn.hitsz.edu.cn%2FcasLogin"
)
SUCCESS_MARKER = "/authentication/main"
MAX_REDIRECTS = 5

_SALT_FIELD = "pwdEncryptSalt"


class AuthenticationError(Exception):
    """Login could not be completed."""


def parse_login_form(html: str, username: str, password: str) -> dict[str, str]:
    """Build the login form data from the login page.

    Hidden inputs of the password form are copied over and the password is
    encrypted with the salt the page carries.
    """
    soup = BeautifulSoup(html, "html.parser")
    form = {"username": username, "password": password}
    salt = None

    for field in soup.select("form#pwdFromId input[type=hidden]"):
        name = field.get("name")
        value = field.get("value")
        if name is not None:
            if value is not None:
                form[name] = value
                if name == _SALT_FIELD:
                    salt = value
        elif field.get("id") == _SALT_FIELD and value is not None:
            salt = value

    if salt is None:
        raise AuthenticationError("fail to get pwdEncryptSalt.")

    form["password"] = aes_encrypt_password(password, salt)
    form["captcha"] = ""
    form["rememberMe"] = "true"
    return form


def authenticate(
    session: requests.Session, username: str, password: str
) -> requests.Response:
    """Log ``session`` in; its cookies then carry the login."""
    session.max_redirects = MAX_REDIRECTS
    page = session.get(LOGIN_URL)
    form = parse_login_form(page.text, username, password)
    response = session.post(LOGIN_URL, data=form)
    if SUCCESS_MARKER not in response.url:
        raise AuthenticationError(f"Authentication failed, return url is {response.url}")
    return response