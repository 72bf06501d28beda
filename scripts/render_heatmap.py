#!/usr/bin/env python3
"""Render a sample heatmap of random weighted points around Rodez."""
import argparse, logging, random
from heatlayer import Heatmap, LatLng, MapData, StaticMap


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("-o", "--out", default="sample_heatmap.png")
    ap.add_argument("-n", "--points", type=int, default=50)
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--style", choices=["spots", "squares"], default="spots")
    args = ap.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    rnd = random.Random(args.seed)
    heatmap = Heatmap(shade_count=Heatmap.SHADES32, stamp_radius=100, opacity=75, style=args.style)
    for _ in range(args.points):
        heatmap.add_point(
            LatLng(rnd.uniform(44.351172, 44.352887), rnd.uniform(2.565672, 2.571092)),
            rnd.randint(1, 10),
        )

    sm = StaticMap(MapData(LatLng(44.351933, 2.568113), 17, 600, 400)).add_layer(heatmap)
    sm.render().save(args.out)
    print(args.out)


if __name__ == "__main__":
    main()
