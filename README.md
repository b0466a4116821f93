# gexe

Small helpers for writing system scripts in Python: session variables with
`$name` / `${name}` expansion, printf-style formatting, a chainable string
type, simple HTTP GET/POST builders, TCP address checks and information about
the running program. It has no dependencies outside the standard library.

## Install

```
pip install gexe
```

## Variables and expansion

```python
from gexe.session import Session

s = Session()
s.set_var("name", "World")
s.declare_vars("greeting=Hello", 'target="${name}"')
print(s.expand("$greeting, ${target}!"))   # Hello, World!
print(s.expand("costs \\$5"))              # costs $5
```

Session variables take precedence over environment variables of the same
name; a name that is neither expands to an empty string. `set_env` and
`declare_envs` write to the process environment, `unset_var` removes a session
variable and `val` looks a name up.

When extra arguments are given, the text is formatted first, printf style:

```python
s.set_var("user", "User: %s", "Alice")
s.expand("Hello %s: ${user}", "friend")    # Hello friend: User: Alice
```

The variable store itself is `gexe.vars.Variables`, available from
`s.variables()`. Its escape character (backslash by default) can be changed
with `with_escape_char`, and `gexe.vars.parse_vars` splits `key=value` lines
into pairs without expanding them.

The formatter is `gexe.sprintf.sprintf`; `apply_fmt` formats only when
arguments are given. Missing, extra and mismatched arguments are marked in the
output, e.g. `sprintf("Hello", "x")` gives `Hello%!(EXTRA string=x)`.

The module-level functions in `gexe.session` (`set_var`, `val`, `expand`,
`printf`, `println`, `print_to`, `join`, `join_path`, `get`, `post`, ...) work
on a shared default session, `DEFAULT_SESSION`.

## Printing and joining

```python
s.set_var("HOME", "/home/user")
s.join(",", "${HOME}", "docs")       # "/home/user,docs"
s.join_path("${HOME}", "docs")       # "/home/user/docs"
s.printf("Processing %s ", "file.txt")
s.println("in ${HOME}")
s.print_to(buffer, "Log: ${HOME}")   # text or binary stream
```

The printing methods return the session, so calls can be chained.

## Strings

```python
from gexe.text import string

str(string("  Hello  ").trim_spaces().upper())   # "HELLO"
str(string("Foo").concat("Bar", "Bazz"))         # "FooBarBazz"
string("true").to_bool()                         # True
```

`to_bool`, `to_int` and `to_float` raise `ValueError` on invalid input.
`s.string(...)` returns a `Str` whose value and later `concat` arguments are
expanded with the session's variables.

## HTTP

```python
resp = s.get("http://localhost:8080", "/status")
print(resp.status_code, resp.text())

resp = s.post(b"payload", "http://localhost:8080/upload")
```

`gexe.httpio.get` and `gexe.httpio.post` return `ResourceReader` and
`ResourceWriter` builders with `add_header`, `set_header`, `with_headers`,
`with_timeout`, `text`, `content`, `body` (and `form_data` for posts), ended
by `do()`. HTTP error statuses come back as a `Response`; connection failures
raise `OSError`.

## Program and network information

```python
s.workdir()
s.prog().pid()
s.prog_avail("python3")              # full path, or "" if not on PATH
s.add_exec_path("/opt/tools/bin")
s.address_usable("127.0.0.1:8080")   # raises gexe.netaddr.AddressError if not usable
```

## What it does not do

The package does not start or run other programs, and it has no helpers for
reading, writing or creating files and directories.

## Tests

```
pip install -e .[test]
pytest
```