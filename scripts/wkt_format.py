import sys
from argparse import ArgumentParser
from collections.abc import Iterable, Sequence
from typing import TextIO

from sfwkt.exceptions.wkt_error import WKTError
from sfwkt.lib.geometry_filter import finite_point_filter
from sfwkt.lib.wkt_reader import WKTReader
from sfwkt.lib.wkt_writer import WKTWriter
from sfwkt.models.geometry_type import GeometryType


def format_lines(
    lines: Iterable[str],
    output: TextIO,
    *,
    expected_type: GeometryType | None = None,
    finite: bool = False,
) -> None:
    """Normalize each non-blank line of WKT, writing one result line per input line."""
    geometry_filter = finite_point_filter(z=True, m=True) if finite else None
    for line in lines:
        text = line.strip()
        if not text:
            continue
        geometry = WKTReader.read_geometry(text, geometry_filter, expected_type)
        output.write(WKTWriter.write_geometry(geometry) if geometry is not None else 'EMPTY')
        output.write('\n')


def _geometry_type(value: str) -> GeometryType:
    return GeometryType(value.upper())


def main(argv: Sequence[str] | None = None) -> int:
    parser = ArgumentParser(description='Normalize Well-Known Text geometries')
    parser.add_argument('wkt', nargs='*', help='geometries to normalize, read from stdin when omitted')
    parser.add_argument('--expect', type=_geometry_type, choices=list(GeometryType), help='required geometry type')
    parser.add_argument('--finite', action='store_true', help='drop points with non-finite ordinates')
    args = parser.parse_args(argv)

    try:
        format_lines(
            args.wkt or sys.stdin,
            sys.stdout,
            expected_type=args.expect,
            finite=args.finite,
        )
    except WKTError as e:
        print(f'{type(e).__name__}: {e}', file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
