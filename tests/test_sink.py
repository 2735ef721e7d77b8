import io
import threading

from ptrsweep.models import ResolveResult
from ptrsweep.output.sink import OutputSink, strip_root


def test_strip_root():
    assert strip_root("dns.google.") == "dns.google"
    assert strip_root("dns.google") == "dns.google"


def test_address_tab_hostname():
    out = io.StringIO()
    sink = OutputSink(out)
    sink.write(ResolveResult("8.8.8.8", ("dns.google.",)))
    assert out.getvalue() == "8.8.8.8\tdns.google\n"


def test_domain_only():
    out = io.StringIO()
    sink = OutputSink(out, domain_only=True)
    sink.write(ResolveResult("8.8.8.8", ("dns.google.",)))
    assert out.getvalue() == "dns.google\n"
    assert "\t" not in out.getvalue()


def test_one_line_per_hostname():
    out = io.StringIO()
    sink = OutputSink(out)
    written = sink.write(ResolveResult("10.0.0.1", ("a.example.", "b.example.", "a.example")))
    assert written == 2
    assert out.getvalue() == "10.0.0.1\ta.example\n10.0.0.1\tb.example\n"


def test_failed_hidden_by_default():
    out = io.StringIO()
    sink = OutputSink(out)
    assert sink.write(ResolveResult("10.0.0.1")) == 0
    assert out.getvalue() == ""


def test_failed_shown():
    out = io.StringIO()
    sink = OutputSink(out, show_failed=True)
    sink.write(ResolveResult("10.0.0.1"))
    assert out.getvalue() == "10.0.0.1\tFAILED\n"


def test_failed_shown_in_domain_mode():
    out = io.StringIO()
    sink = OutputSink(out, domain_only=True, show_failed=True)
    sink.write(ResolveResult("10.0.0.1"))
    assert out.getvalue() == "10.0.0.1\tFAILED\n"


def test_concurrent_writes_do_not_interleave():
    out = io.StringIO()
    sink = OutputSink(out)
    hostnames = tuple(f"h{i}.example." for i in range(20))

    def work(n):
        for i in range(50):
            sink.write(ResolveResult(f"10.0.{n}.{i}", hostnames))

    threads = [threading.Thread(target=work, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    lines = out.getvalue().splitlines()
    assert len(lines) == 8 * 50 * 20
    assert sink.lines_written == len(lines)
    # each result's lines stay contiguous
    for start in range(0, len(lines), 20):
        block = lines[start:start + 20]
        assert len({line.split("\t")[0] for line in block}) == 1
