# coursepick

This is a small command-line client for picking courses in the teaching-affairs web
system. It reads course listings that you have saved as JSON. It shows each
course in turn and asks whether to add it to your cart.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Course files

Both commands read every `*.json` file that sits directly in a course directory.
The default directory is `./all_courses`. Files are read in name order.

Each file is a saved response of the course query page and holds its courses
under `kxrwList.list`. Every course needs a string `id` and a string `kcmc`
(the course name). A course may also have `dgjsmc` and `tyxmmc` (teacher
information).

The login-based command also reads the selection parameters from `xsxkPage` in
the same file. These are `p_pylx`, `p_sfgldjr`, `p_xn`, `p_xq`, `p_xnxq`,
`p_dqxn`, `p_dqxq`, `p_dqxnxq` and `p_xkfsdm`. If one of them is missing, the
command reports an error and stops.

## Logging in with a username and password

```
coursepick-auth --username 20240001 --password password
```

The command first signs in through the central authentication service. It
encrypts the password with the salt that the login page provides. If the login
page carries no salt, or the login does not end on the expected page, the
command prints the reason and exits with status 1.

Next it lists every course in the course files. Then it walks through the files
and asks about each course:

- `y` or `yes` adds the course to the cart right away. If the request fails,
  it is tried up to three times, three seconds apart.
- `s` or `select` remembers the course for later.
- Anything else skips the course.

After each pass over the directory, the remembered courses are written to
`pre_select.json` in the current directory. Then a new pass begins. The loop
keeps going until the input ends (for example Ctrl-D), and the command then
exits with status 0.

The remembered courses are stored in a copy of the last course file that was
read, with its course list replaced.

Options:

- `-u`, `--username`: account name.
- `-p`, `--password`: account password.
- `-f`, `--folder-addr`: directory holding the course JSON files. The default
  is `./all_courses`.
- `-s`, `--selected-json`: skip the prompts and add every course listed in
  `./pre_select.json`, pausing two seconds after each course.
- `-V`, `--version`: print the version.

A typical flow has two steps. First, run once without `-s` to build
`pre_select.json`. Then, the moment selection opens, run again with `-s`:

```
coursepick-auth -u 20240001 -p password -s
```

## Using an existing session cookie

If you already have a logged-in browser session, copy its cookie header and pass
it in:

```
coursepick-cookie --cookie placeholder
```

This command reads `./all_courses` and asks `y`/`yes` for each course. For each
accepted course it sends the add-to-cart request with your cookie and prints the
server's response. Any other answer, or the end of input, skips the course.

The request carries fixed term parameters: year `2024-2025`, term `2`, method
`xx-b-b`. It does not use the values in `xsxkPage`.

Options:

- `-c`, `--cookie`: the cookie header value. This option is required.
- `-s`, `--show`: before sending each request, print the equivalent `curl`
  command.
- `-V`, `--version`: print the version.

## Library use

The pieces can also be used on their own:

- `coursepick.crypto.aes_encrypt_password(password, salt)` encrypts a password
  the way the login form expects. It uses AES-128-CBC with a random IV and a
  random 64-character prefix, and returns base64 text. An empty salt returns
  the password unchanged. A salt that is not 16 bytes raises `ValueError`.
- `coursepick.login.parse_login_form(html, username, password)` builds the
  login form data from the login page.
- `coursepick.login.authenticate(session, username, password)` signs a
  `requests.Session` in. It raises `AuthenticationError` on failure.
- `coursepick.courses.SelectionParams.from_document(document)` and
  `coursepick.courses.build_add_body(params, course_id)` build the
  add-to-cart request body.
- `coursepick.courses.course_list`, `load_document`, `iter_course_files`,
  `format_course`, `list_all_courses` and `parse_answer` read and display
  course files.

## What it does not do

coursepick does not fetch course listings from the server. You have to save
the query responses as JSON files yourself. It also does not check the
server's reply to an add-to-cart request. Whatever the reply is, it is printed
as it came.