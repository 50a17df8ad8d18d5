import json
import re

from polycube.progress import make_emit_progress, make_tail, progress_fields, stamp
from polycube.search import SearchStats

def test_stamp_format():
    assert re.fullmatch(r"\[\d\d:\d\d:\d\d\]", stamp())

def test_stream_appends_json_lines(tmp_path):
    path = tmp_path / "logs" / "progress.jsonl"
    tail = make_tail(2)
    emit = make_emit_progress(str(path), echo=False, tail=tail)
    emit("start", variant="bedlam")
    emit("progress", depth=3)
    emit("complete", solutions=0)
    lines = [json.loads(l) for l in path.read_text(encoding="utf-8").splitlines()]
    assert [l["event"] for l in lines] == ["start", "progress", "complete"]
    assert lines[1]["depth"] == 3
    assert [p["event"] for p in tail] == ["progress", "complete"]

def test_echo(capsys):
    emit = make_emit_progress(echo=True)
    emit("solution", index=1, path=None)
    out = capsys.readouterr().out
    assert "solution | index=1" in out
    assert "path" not in out

def test_progress_fields():
    stats = SearchStats()
    stats.observe(3)
    stats.observe(1)
    f = progress_fields(stats)
    assert f["depth"] == 1
    assert f["low_water"] == 1
    assert f["best_depth"] == 3
