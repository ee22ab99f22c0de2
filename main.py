from __future__ import annotations

import argparse
import dataclasses
import json
import logging
from pathlib import Path

from chartcore import ChartConfigError, ChartDataError, PillarChart, PointChart, load_config
from chartcore.interaction import WheelEvent
from chartcore.measurement import CharCountMeasurer, PillowTextMeasurer, TextMeasurer


LOGGER = logging.getLogger("chartcore.cli")


def _parse_floats(raw: str, count: int, label: str) -> tuple[float, ...]:
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != count:
        raise argparse.ArgumentTypeError(f"{label} must have {count} comma-separated numbers")
    try:
        return tuple(float(p) for p in parts)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{label} must be numeric: {raw}") from exc


def _wheel_arg(raw: str) -> tuple[float, ...]:
    return _parse_floats(raw, 3, "--wheel")


def _select_arg(raw: str) -> tuple[float, ...]:
    return _parse_floats(raw, 4, "--select")


def _measurer(name: str) -> TextMeasurer | None:
    if name == "chars":
        return CharCountMeasurer()
    if name == "pillow":
        return PillowTextMeasurer()
    return None


def main() -> None:
    parser = argparse.ArgumentParser(prog="chartcore")
    sub = parser.add_subparsers(dest="command", required=True)

    frame = sub.add_parser("frame", help="Compute the render frame of a chart and print it as JSON.")
    frame.add_argument("config", type=Path, help="Chart config JSON (camelCase or snake_case keys).")
    frame.add_argument("data", type=Path, help="Dataset JSON: [[x, y], ...] or [[[x1, x2], y], ...].")
    frame.add_argument("--kind", choices=["point", "pillar"], default="point")
    frame.add_argument(
        "--wheel",
        action="append",
        type=_wheel_arg,
        default=[],
        metavar="X,Y,DELTA",
        help="Replay a wheel event at cursor X,Y; negative DELTA zooms in. Repeatable.",
    )
    frame.add_argument("--select", type=_select_arg, default=None, metavar="X1,Y1,X2,Y2", help="Replay a selection drag.")
    frame.add_argument("--measure", choices=["none", "chars", "pillow"], default="chars")
    frame.add_argument("--log-level", default="WARNING")

    args = parser.parse_args()
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.WARNING))

    if args.command == "frame":
        try:
            config = load_config(args.config)
            values = json.loads(args.data.read_text(encoding="utf-8"))
            chart = PointChart(config, values) if args.kind == "point" else PillarChart(config, values)
        except (ChartConfigError, ChartDataError, OSError, json.JSONDecodeError) as exc:
            LOGGER.error("cannot build chart: %s", exc)
            raise SystemExit(1) from exc
        measurer = _measurer(args.measure)
        chart.render(measurer)
        for x, y, delta in args.wheel:
            chart.on_wheel(WheelEvent(x=x, y=y, delta_y=delta))
            chart.render(measurer)
        if args.select is not None:
            x1, y1, x2, y2 = args.select
            chart.on_pointer_down(x1, y1)
            chart.on_pointer_move(x2, y2)
        out = chart.render(measurer).to_dict()
        agg = chart.aggregate()
        out["aggregate"] = dataclasses.asdict(agg) if agg is not None else None
        print(json.dumps(out, indent=2, default=float))


if __name__ == "__main__":
    main()
