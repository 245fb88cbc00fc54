"""Write JSON Schemas for the wire types, for client code generation.

Usage: python -m board_service.scripts.export_schema OUT_DIR
"""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel

from board_service.api.v1.schemas.board import (
    BoardResponse,
    MessageRequest,
    StoredMessageResponse,
)

logger = logging.getLogger(__name__)

WIRE_MODELS: dict[str, type[BaseModel]] = {
    "Board": BoardResponse,
    "Message": MessageRequest,
    "StoredMessage": StoredMessageResponse,
}


def export_schemas(out_dir: Path) -> list[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for name, model in WIRE_MODELS.items():
        path = out_dir / f"{name}.json"
        path.write_text(json.dumps(model.model_json_schema(), indent=2) + "\n")
        written.append(path)
        logger.info("Wrote %s", path)
    return written


def main(argv: Sequence[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("out_dir", type=Path, help="Directory to write the schemas to")
    args = parser.parse_args(argv)
    export_schemas(args.out_dir)


if __name__ == "__main__":
    main()
