"""Write the Sweet Spot API's OpenAPI schema to disk."""

from __future__ import annotations

import argparse
import json
import os
from pathlib import Path

from fastapi.encoders import jsonable_encoder

from sweetspot.api.server import app

DEFAULT_OUTPUT = Path("api_spec/openapi.json")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT)
    args = parser.parse_args()

    schema = app.openapi()
    public_base = os.getenv("PUBLIC_API_BASE_URL")
    if public_base:
        schema["servers"] = [{"url": public_base.rstrip("/")}]
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(json.dumps(jsonable_encoder(schema), indent=2))
    print(f"OpenAPI schema written to {args.output}")


if __name__ == "__main__":  # pragma: no cover
    main()
