# Demo: parse a TOC text file and show the outline
# Run from repo root:
#   python notebooks/01_demo_parse.py data/toc/your_book.txt

import sys

from toc_processor.api import parse_toc_file

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python notebooks/01_demo_parse.py data/toc/your_book.txt")
        raise SystemExit(1)
    result = parse_toc_file(sys.argv[1])

    print(f"Looks like a TOC: {result.looks_like_toc}")
    print(result.tree_md)
    print(result.entries_df().to_string(index=False))
