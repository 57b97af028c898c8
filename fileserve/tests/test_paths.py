import pytest

from fileserve.paths import request_url_path, resolve_path


@pytest.mark.parametrize(
    "request_path, parts",
    [
        ("/", []),
        ("", []),
        ("/a.txt", ["a.txt"]),
        ("/sub/", ["sub"]),
        ("//sub///nested//file.bin", ["sub", "nested", "file.bin"]),
        ("/./sub/./a", ["sub", "a"]),
        ("/../secret.txt", ["secret.txt"]),
        ("/sub/../../../etc/passwd", ["sub", "etc", "passwd"]),
        ("/with space/ünïcode.txt", ["with space", "ünïcode.txt"]),
    ],
)
def test_resolve_path(tmp_path, request_path, parts):
    resolved = resolve_path(request_path, tmp_path)

    assert resolved == tmp_path.joinpath(*parts)
    assert resolved.is_relative_to(tmp_path)


@pytest.mark.parametrize(
    "target, path",
    [
        ("/", "/"),
        ("/a.txt?download=1", "/a.txt"),
        ("/a.txt#top", "/a.txt"),
        ("/my%20file.txt", "/my file.txt"),
        ("/sub%2F", "/sub/"),
        ("/%2e%2e/secret", "/../secret"),
        ("relative", "/relative"),
        ("//double", "//double"),
        ("http://example.com/a.txt", "/a.txt"),
        ("http://example.com:8000/my%20file.txt?q=1", "/my file.txt"),
        ("http://example.com", "/"),
    ],
)
def test_request_url_path(target, path):
    assert request_url_path(target) == path
