#!/usr/bin/env python3
"""Render a heatmap from a CSV (lat,lng[,weight]) or JSON point file."""
import argparse, csv, json, logging
from pathlib import Path
from PIL import Image
from heatlayer import Heatmap, LatLng, MapData, StaticMap
from heatlayer.metrics import summarize
from heatlayer.profiles import load_config


def read_points(path: Path):
    if path.suffix.lower() == ".json":
        rows = json.loads(path.read_text())
        return [(float(r["lat"]), float(r["lng"]), int(r.get("weight", 1))) for r in rows]
    pts = []
    with path.open(newline="") as f:
        for row in csv.reader(f):
            if not row or row[0].strip().lower() in ("lat", "latitude"):
                continue
            pts.append((float(row[0]), float(row[1]), int(row[2]) if len(row) > 2 and row[2].strip() else 1))
    return pts


def main():
    ap = argparse.ArgumentParser(description="Render a heatmap layer onto a static map image")
    ap.add_argument("points")
    ap.add_argument("-o", "--out", default="heatmap.png")
    ap.add_argument("--profile", default="default")
    ap.add_argument("--base", default=None, help="base map image; its size sets the output size")
    ap.add_argument("--width", type=int, default=600)
    ap.add_argument("--height", type=int, default=400)
    ap.add_argument("--center", default=None, help="lat,lng; defaults to fitting the points")
    ap.add_argument("--zoom", type=int, default=None)
    ap.add_argument("--padding", type=int, default=20)
    ap.add_argument("--shades", type=int, default=None)
    ap.add_argument("--radius", type=int, default=None)
    ap.add_argument("--opacity", type=float, default=None)
    ap.add_argument("--style", choices=["spots", "squares"], default=None)
    ap.add_argument("--dither", action="store_true", default=None)
    ap.add_argument("--fill", action="store_true", default=None)
    ap.add_argument("--metrics", action="store_true")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(asctime)s %(levelname)s %(name)s %(message)s")

    cfg = load_config(
        args.profile,
        shade_count=args.shades, stamp_radius=args.radius, opacity=args.opacity,
        style=args.style, dither=args.dither, fill_with_smallest=args.fill,
    )
    heatmap = Heatmap(cfg)
    for lat, lng, w in read_points(Path(args.points)):
        heatmap.add_point(LatLng(lat, lng), w)

    base = Image.open(args.base).convert("RGBA") if args.base else None
    width, height = base.size if base else (args.width, args.height)
    if args.center and args.zoom is not None:
        lat, lng = (float(v) for v in args.center.split(","))
        sm = StaticMap(MapData(LatLng(lat, lng), args.zoom, width, height), base=base).add_layer(heatmap)
    else:
        sm = StaticMap.fitted([heatmap], width, height, padding=args.padding, base=base)

    sm.render().save(args.out)
    out = {"out": args.out, "points": len(heatmap.points), "config": cfg.to_dict(), "errors": sm.layer_errors}
    if args.metrics and heatmap.last_result is not None:
        out["metrics"] = summarize(heatmap.last_result.metrics)
    print(json.dumps(out, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
