# =========================
# indexblocks/cli.py
# =========================
import sys
import logging
import pathlib
import argparse
import yaml
from .exceptions import IndexBlockError
from .index_block_sets import IndexBlockSets
from .model_config import load_model_config
from .parser_utils import TokenStream


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="python -m indexblocks.cli",
        description="Read an INDEX_BLOCK_SETS file and write it back in canonical form.",
        formatter_class=argparse.RawTextHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m indexblocks.cli blocks.txt --config model.yaml\n"
            "  python -m indexblocks.cli blocks.txt --config model.dat --r --out blocks.R\n"
        ),
    )
    parser.add_argument("blocks", help="Path to INDEX_BLOCK_SETS file")
    parser.add_argument(
        "--config",
        required=True,
        help="Model configuration (.yaml/.yml, or the line-oriented format)",
    )
    parser.add_argument("--out", help="Output path (default: stdout)")
    parser.add_argument("--r", action="store_true", help="Write an R list instead")
    parser.add_argument(
        "--strict", action="store_true", help="Reject overlapping ranges within a block"
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)
    parser.add_argument("--version", action="version", version="indexblocks 0.1.0")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose > 1 else logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    blocks_path = pathlib.Path(args.blocks)

    # read model configuration
    try:
        config = load_model_config(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(3)
    except OSError as e:
        print(f"Error: failed to read model configuration: {args.config} ({e})", file=sys.stderr)
        sys.exit(3)
    except (IndexBlockError, yaml.YAMLError) as e:
        print(f"Error: {args.config}: {e}", file=sys.stderr)
        sys.exit(2)

    # read index block sets
    try:
        stream = TokenStream.from_path(blocks_path)
    except FileNotFoundError:
        print(f"Error: index block file not found: {blocks_path}", file=sys.stderr)
        sys.exit(3)
    except OSError as e:
        print(f"Error: failed to read index block file: {blocks_path} ({e})", file=sys.stderr)
        sys.exit(3)
    except IndexBlockError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    try:
        ibss =IndexBlockSets(config, strict=args.strict)
        ibss.read(stream)
    except IndexBlockError as e:
        print(f"Error: {blocks_path}: {e}", file=sys.stderr)
        sys.exit(2)

    text = (ibss.write_to_r() if args.r else ibss.write()) + "\n"

    # write
    if not args.out:
        sys.stdout.write(text)
        return
    out_path = pathlib.Path(args.out)
    try:
        out_path.write_text(text, encoding="utf-8")
    except OSError as e:
        print(f"Error: failed to write output: {out_path} ({e})", file=sys.stderr)
        sys.exit(3)

    print(f"OK -> {out_path}")


if __name__ == "__main__":
    main()
