import textwrap

import pytest

ISSUES_URL = "https://code.google.com/feeds/issues/p/go/issues"

FEED_XML = textwrap.dedent(
    """\
    <?xml version='1.0' encoding='UTF-8'?>
    <feed xmlns='http://www.w3.org/2005/Atom'
          xmlns:issues='http://schemas.google.com/projecthosting/issues/2009'>
      <id>http://code.google.com/feeds/issues/p/go/issues/full</id>
      <title>Issues - go</title>
      <entry>
        <id>http://code.google.com/feeds/issues/p/go/issues/full/42</id>
        <published>2011-11-02T10:00:00.000Z</published>
        <updated>2011-11-03T11:30:00.000Z</updated>
        <title>runtime: crash on startup</title>
        <content type='html'>&lt;p&gt;It &lt;b&gt;crashes&lt;/b&gt;.&lt;/p&gt;</content>
        <link rel='alternate' type='text/html' href='http://code.google.com/p/go/issues/detail?id=42'/>
        <author>
          <name>gopher</name>
          <uri>/u/gopher/</uri>
        </author>
        <issues:cc>
          <issues:uri>/u/alice/</issues:uri>
          <issues:username>alice</issues:username>
        </issues:cc>
        <issues:label>Type-Defect</issues:label>
        <issues:label>Priority-Medium</issues:label>
        <issues:owner>
          <issues:uri>/u/bob/</issues:uri>
          <issues:username>bob</issues:username>
        </issues:owner>
        <issues:stars>3</issues:stars>
        <issues:state>open</issues:state>
        <issues:status>Accepted</issues:status>
        <issues:summary>runtime: crash on startup</issues:summary>
      </entry>
      <entry>
        <id>http://code.google.com/feeds/issues/p/go/issues/full/7</id>
        <title>gc: crash with large arrays</title>
      </entry>
    </feed>
    """
).encode("utf-8")

ENTRY_XML = textwrap.dedent(
    """\
    <?xml version='1.0' encoding='UTF-8'?>
    <entry xmlns='http://www.w3.org/2005/Atom'
           xmlns:issues='http://schemas.google.com/projecthosting/issues/2009'>
      <id>http://code.google.com/feeds/issues/p/go/issues/full/42</id>
      <title>runtime: crash on startup</title>
      <content type='html'>&lt;p&gt;It crashes&lt;/p&gt;</content>
      <issues:status>Accepted</issues:status>
    </entry>
    """
).encode("utf-8")

COMMENTS_XML = textwrap.dedent(
    """\
    <?xml version='1.0' encoding='UTF-8'?>
    <feed xmlns='http://www.w3.org/2005/Atom'>
      <entry>
        <id>http://code.google.com/feeds/issues/p/go/issues/42/comments/full/1</id>
        <title>Comment 1 by alice</title>
        <content type='html'>me too</content>
      </entry>
    </feed>
    """
).encode("utf-8")

LOGIN_BODY = "SID=sid-value\nLSID=lsid-value\nAuth=token-value\n"


class FakeResponse:
    def __init__(self, status_code=200, content=b"", reason=None):
        self.status_code = status_code
        self.content = content if isinstance(content, bytes) else content.encode("utf-8")
        self.reason = reason if reason is not None else {200: "OK", 201: "Created", 403: "Forbidden", 404: "Not Found", 500: "Internal Server Error"}.get(status_code, "")
        self.closed = False

    @property
    def text(self):
        return self.content.decode("utf-8")

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
        return False


class FakeSession:
    """Records requests and answers them from a URL -> response mapping."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self.responses = []

    def _respond(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        answer = self.routes.get((method, url))
        if answer is None:
            raise AssertionError(f"unexpected request: {method} {url}")
        if isinstance(answer, Exception):
            raise answer
        self.responses.append(answer)
        return answer

    def get(self, url, **kwargs):
        return self._respond("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._respond("POST", url, **kwargs)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


@pytest.fixture
def fake_session():
    return FakeSession()
