import os

import pytest

from gexe.vars import Variables, parse_vars

_KEYS = ["foo", "bar", "bazz", "dazz", "fuzz", "dood", "razz", "kazz",
         "batt", "tar", "jazz", "DIR", "is", "this", "that", "f", "files"]


@pytest.fixture(autouse=True)
def clean_env():
    saved = dict(os.environ)
    for key in _KEYS:
        os.environ.pop(key, None)
    yield
    os.environ.clear()
    os.environ.update(saved)


@pytest.mark.parametrize("esc,text,expected", [
    ("", " Hello, from the world!  ", " Hello, from the world!  "),
    ("", "\\\\\\\\\\ \\\\\\ \\\\\\", "\\\\\\\\\\ \\\\\\ \\\\\\"),
    ("", "this \\ that", "this \\ that"),
    ("", "this\\ that", "this\\ that"),
    ("", "this \\that", "this \\that"),
    ("", "\\this that", "\\this that"),
    ("", "this that\\", "this that\\"),
    ("", "this\\that", "this\\that"),
    ("", "this w\\t t\\at", "this w\\t t\\at"),
    ("", "t\\\\s that", "t\\\\s that"),
    ("", "t\\\\s t\\ha\\t", "t\\\\s t\\ha\\t"),
    ("", "this \\\\\\\\that", "this \\\\\\\\that"),
    ("", "this \\\\\\\\ that", "this \\\\\\\\ that"),
    ("", "this\\\\\\ that", "this\\\\\\ that"),
    ("", "\\\\\\this that", "\\\\\\this that"),
    ("", "this that\\\\\\", "this that\\\\\\"),
    ("", "this\\\\\\that", "this\\\\\\that"),
    ("%", "%$this that", "$this that"),
    ("#", "this #$is that", "this $is that"),
    ("@", "this @$that", "this $that"),
    ("&", "thi\\s\\ &$that", "thi\\s\\ $that"),
    ("*", "*$this th\\at\\", "$this th\\at\\"),
    ("?", "this?$isthat", "this$isthat"),
    ("\\", "this \\${is} that", "this ${is} that"),
    ("!", "this!${is}that or other", "this${is}that or other"),
    ("", "$$$$$ $$ $$$", "$$$$$ $$ $$$"),
    ("", "foo $ bar", "foo $ bar"),
    ("", "foo$ bar", "foo$ bar"),
    ("", "foo$ bar$", "foo$ bar$"),
])
def test_expand_var(esc, text, expected):
    v = Variables().with_escape_char(esc)
    assert v.expand_var(text, v.val) == expected


@pytest.mark.parametrize("esc,setup,text,expected", [
    ("", lambda v: v.set_var("foo", "boo"), "$foo bar", "boo bar"),
    ("", lambda v: v.set_var("bar", "zaar"), "foo $bar", "foo zaar"),
    ("", lambda v: v.set_var("bar", "zaar"), "foo:$bar:cat", "foo:zaar:cat"),
    ("", lambda v: v.set_var("bar", "zaar"), "foo:$bar:cat:$tar", "foo:zaar:cat:"),
    ("", lambda v: v.declare_envs("bar=zaar", "bazz=raaz"),
     "foo $bar with $bazz", "foo zaar with raaz"),
    ("", lambda v: v.declare_envs("bar=zaar", "bazz=raaz"),
     "foo ${bar} with ${bazz}", "foo zaar with raaz"),
    ("", lambda v: v.declare_envs("bar=zaar", "bazz=raaz"),
     "foo ${bar} with ${bazz} at $jazz", "foo zaar with raaz at "),
    ("", lambda v: v.declare_envs("bar=zaar", "bazz=raaz"),
     "foo${bar}with that${bazz}", "foozaarwith thatraaz"),
    ("", lambda v: v, "foo $120.00", "foo 20.00"),
    ("", lambda v: v, "foo \\$120.00", "foo $120.00"),
    ("", lambda v: v.set_env("DIR", "/var/logs"),
     "/bin/bash -c 'files=\\$(sudo find $DIR); for f in \\$files; do cat \\$f; done'",
     "/bin/bash -c 'files=$(sudo find /var/logs); for f in $files; do cat $f; done'"),
    ("%", lambda v: v.set_env("DIR", "/var/logs"),
     "/bin/bash -c 'files=%$(sudo find $DIR); for f in %$files; do cat %$f; done'",
     "/bin/bash -c 'files=$(sudo find /var/logs); for f in $files; do cat $f; done'"),
])
def test_expand_eval(esc, setup, text, expected):
    v = setup(Variables().with_escape_char(esc))
    assert v.expand(text) == expected


@pytest.mark.parametrize("lines,expected", [
    (["foo=bar"], {"foo": "bar"}),
    (["foo=bar", "bazz=razz", "dazz=jazz"], {"foo": "bar", "bazz": "razz", "dazz": "jazz"}),
    (["foo=bar", "bazz=${foo}", "dazz=jazz ${foo}"],
     {"foo": "bar", "bazz": "${foo}", "dazz": "jazz ${foo}"}),
    (["foo=bar", "bazz", "dazz=jazz"], {"foo": "bar", "dazz": "jazz"}),
    (["foo=bar", "bazz='booz", "dazz=jazz"], {"foo": "bar", "bazz": "booz", "dazz": "jazz"}),
    (["foo=bar bazz='booz'", "dazz=jazz"], {"foo": "bar bazz=", "dazz": "jazz"}),
    ([], {}),
])
def test_parse_vars(lines, expected):
    parsed = {k: v.strip() for k, v in parse_vars(*lines)}
    assert parsed == {k: v.strip() for k, v in expected.items()}


@pytest.mark.parametrize("lines,expected", [
    (["foo=bar"], {"foo": "bar"}),
    (["foo=bar", "bazz=razz", "dazz=jazz"], {"foo": "bar", "bazz": "razz", "dazz": "jazz"}),
    (["foo=bar", "bazz=${foo}", 'dazz="jazz ${foo}"'],
     {"foo": "bar", "bazz": "bar", "dazz": "jazz bar"}),
    (["foo=bar", "bazz", "dazz=jazz"], {"foo": "bar", "dazz": "jazz"}),
    (["foo=bar", "bazz='booz", "dazz=jazz"], {"foo": "bar", "bazz": "booz", "dazz": "jazz"}),
    (["foo=bar bazz='booz'", "dazz=jazz"], {"foo": "bar bazz=", "dazz": "jazz"}),
])
def test_declare_vars(lines, expected):
    v = Variables().declare_vars(*lines)
    for key, value in expected.items():
        assert key in v
        assert v.val(key) == value


def test_declare_vars_skips_invalid_line():
    v = Variables().declare_vars("foo=bar", "bazz")
    assert "bazz" not in v


def test_set_and_unset_var():
    v = Variables().set_var("foo", "bar")
    assert v.val("foo") == "bar"
    v.unset_var("foo")
    assert "foo" not in v
    assert v.val("foo") == ""


@pytest.mark.parametrize("lines,expected", [
    (["foo=bar"], {"foo": "bar"}),
    (["foo=bar", "bazz=razz", "dazz=jazz"], {"foo": "bar", "bazz": "razz", "dazz": "jazz"}),
    (["foo=bar", "bazz", "dazz=jazz"], {"foo": "bar", "dazz": "jazz"}),
    (["foo=bar", "bazz='booz", "dazz=jazz"], {"foo": "bar", "dazz": "jazz"}),
    (["foo=bar bazz='booz'", "dazz=jazz"], {"foo": "bar bazz=", "dazz": "jazz"}),
])
def test_declare_envs(lines, expected):
    result = Variables().declare_envs(*lines)
    for key, value in expected.items():
        assert result.val(key) == value
        assert os.environ.get(key) == value


def test_set_env():
    result = Variables().set_env("foo", "bar")
    assert result.val("foo") == "bar"
    assert os.environ["foo"] == "bar"


def test_val_mixed_vars_and_envs():
    v = Variables()
    v.declare_vars("foo=bar", "batt=bazz", "razz=dazz")
    v.declare_envs("kazz=jazz", "razz=wazz")
    assert v.val("foo") == "bar"
    assert v.val("batt") == "bazz"
    assert v.val("kazz") == "jazz"
    assert v.val("razz") == "dazz"


@pytest.mark.parametrize("setup,text,expected", [
    (lambda v: v.set_var("foo", "bar"), "you are bar", "you are bar"),
    (lambda v: v.set_var("foo", "bar"), "you are $foo", "you are bar"),
    (lambda v: v.set_var("foo", "bar").set_var("dood", "daad"), "is $foo a $dood?", "is bar a daad?"),
    (lambda v: v.declare_vars("foo=bar", "dood=daad"), "is $foo a $dood?", "is bar a daad?"),
    (lambda v: v.set_env("foo", "bar"), "you are $foo", "you are bar"),
    (lambda v: v.set_env("foo", "bar").set_env("dood", "daad"), "is $foo a $dood?", "is bar a daad?"),
    (lambda v: v.declare_envs("foo=bar", "dood=daad"), "is $foo a $dood?", "is bar a daad?"),
    (lambda v: v.declare_envs("foo=bar").declare_vars("dood=daad"), "is $foo a $dood?", "is bar a daad?"),
    (lambda v: v.declare_vars("foo=bar").declare_envs("foo=daad"), "you are a $foo", "you are a bar"),
    (lambda v: v.declare_envs("foo=bar"), "$foo a \\$dood?", "bar a $dood?"),
])
def test_variables_eval(setup, text, expected):
    assert setup(Variables().with_escape_char("\\")).expand(text) == expected