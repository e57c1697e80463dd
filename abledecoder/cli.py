"""Command line entry point: decode an encrypted AIFC file to a plain one."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from abledecoder.form import FormChunk

_USAGE = "usage: abledecoder <in> <out>"


def main(argv: Sequence[str] | None = None) -> int:
    """Decode the file named by the first argument into the second."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        print(_USAGE)
        return 0

    in_path, out_path = args
    form = FormChunk()

    try:
        source = open(in_path, "rb")
    except OSError as exc:
        raise OSError(f"error opening input file: {in_path}") from exc

    with source:
        try:
            form.read(source)
        except (ValueError, OSError) as exc:
            print(exc, file=sys.stderr)
            print(f"reading file {in_path} failed", file=sys.stderr)
            return 1

    if not form.was_encrypted:
        print("info: file was not encrypted. duplicated input file.")

    try:
        target = open(out_path, "wb")
    except OSError as exc:
        raise OSError(f"error opening output file: {out_path}") from exc

    with target:
        try:
            form.write(target)
        except (ValueError, OSError) as exc:
            print(exc, file=sys.stderr)
            print(f"writing file {out_path} failed", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())