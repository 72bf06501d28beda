import json
import os
import subprocess
import sys
from pathlib import Path

from PIL import Image

ROOT = Path(__file__).resolve().parents[1]


def _run(*args):
    env = {**os.environ, "PYTHONPATH": str(ROOT) + os.pathsep + os.environ.get("PYTHONPATH", "")}
    return subprocess.run([sys.executable, *map(str, args)], capture_output=True, text=True, env=env, cwd=ROOT)


def test_render_points_csv(tmp_path):
    pts = tmp_path / "points.csv"
    pts.write_text("lat,lng,weight\n44.3512,2.5657,1\n44.3528,2.5710,9\n44.3520,2.5680,4\n")
    out = tmp_path / "map.png"
    res = _run(ROOT / "scripts" / "render_points.py", pts, "-o", out, "--shades", "8",
               "--radius", "30", "--opacity", "60", "--metrics")
    assert res.returncode == 0, res.stderr
    report = json.loads(res.stdout)
    assert report["points"] == 3 and report["errors"] == []
    assert report["config"]["shade_count"] == 8
    assert "metrics" in report
    assert Image.open(out).size == (600, 400)


def test_render_points_json_with_profile(tmp_path):
    pts = tmp_path / "points.json"
    pts.write_text(json.dumps([{"lat": 1.0, "lng": 1.0, "weight": 2}, {"lat": 1.01, "lng": 1.02}]))
    out = tmp_path / "cov.png"
    res = _run(ROOT / "scripts" / "render_points.py", pts, "-o", out, "--profile", "coverage",
               "--width", "320", "--height", "240")
    assert res.returncode == 0, res.stderr
    report = json.loads(res.stdout)
    assert report["config"]["style"] == "squares" and report["config"]["fill_with_smallest"] is True
    assert Image.open(out).size == (320, 240)


def test_sample_script(tmp_path):
    out = tmp_path / "sample.png"
    res = _run(ROOT / "scripts" / "render_heatmap.py", "-o", out, "-n", "20", "--seed", "3")
    assert res.returncode == 0, res.stderr
    assert Image.open(out).size == (600, 400)
