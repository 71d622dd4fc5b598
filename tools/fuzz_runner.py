#!/usr/bin/env python3
# tools/fuzz_runner.py
#
# Randomised decode checks for msch.
#
# Each round builds a random schematic body and checks one of:
#   A) round trip: decode(frame(body)) reproduces every field
#   B) chunk independence: a random chunk size gives the same Schematic
#   C) truncation: any strict prefix of the file fails with ERR_UNEXPECTED_EOF
#
# Any failure prints a minimal repro payload and exits non-zero.

import os, sys, base64, random
from typing import Any, Dict, List, Tuple

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
PAYLOAD = os.path.join(ROOT, "tests", "_payload.py")

sys.path.insert(0, ROOT)
import msch

import importlib.util
spec = importlib.util.spec_from_file_location("msch_payload", PAYLOAD)
payload = importlib.util.module_from_spec(spec)
spec.loader.exec_module(payload)

SEED = int(os.environ.get("MSCH_SEED", "4242"))
ROUNDS = int(os.environ.get("MSCH_FUZZ_ROUNDS", "2000"))
MAX_ITEMS = int(os.environ.get("MSCH_GEN_MAX_ITEMS", "12"))
MAX_STR = int(os.environ.get("MSCH_GEN_MAX_STR", "24"))

random.seed(SEED)

def b64(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")

def fail(label: str, ctx: Dict[str, Any]) -> None:
    print("FAIL:", label)
    for k, v in ctx.items():
        print("  {}: {}".format(k, v))
    raise SystemExit(1)

# --- generators ---

def rand_text() -> str:
    out = []
    for _ in range(random.randint(0, MAX_STR)):
        r = random.random()
        if r < 0.80:
            out.append(chr(random.randint(0x20, 0x7E)))
        elif r < 0.95:
            out.append(chr(random.randint(0xA0, 0xD7FF)))
        else:
            out.append(chr(random.randint(0x10000, 0x10FFFF)))
    return "".join(out)

def rand_schematic() -> Tuple[Dict[str, Any], bytes]:
    names = [rand_text() for _ in range(random.randint(0, MAX_ITEMS))]
    fields = {
        "width": random.randint(0, 0xFFFF),
        "height": random.randint(0, 0xFFFF),
        "tags": [(rand_text(), rand_text()) for _ in range(random.randint(0, MAX_ITEMS))],
        "block_names": names,
        "blocks": [
            (random.randint(0, max(len(names) - 1, 0)), random.randint(0, 0xFFFF),
             random.randint(0, 0xFFFF), random.randint(0, 3))
            for _ in range(random.randint(0, MAX_ITEMS))
        ],
    }
    return fields, payload.build_body(**fields)

def check_fields(schem: "msch.Schematic", fields: Dict[str, Any]) -> List[str]:
    bad = []
    if (schem.width, schem.height) != (fields["width"], fields["height"]):
        bad.append("dimensions")
    if [(t.label, t.content) for t in schem.tags] != fields["tags"]:
        bad.append("tags")
    if list(schem.block_names) != fields["block_names"]:
        bad.append("block_names")
    got = [(b.name_index, b.position, b.config, b.rotation) for b in schem.placed_blocks]
    if got != fields["blocks"]:
        bad.append("placed_blocks")
    return bad

def main() -> int:
    for i in range(ROUNDS):
        fields, body = rand_schematic()
        level = random.choice([0, 1, 6, 9])
        data = payload.frame(body, level=level)
        r = random.random()

        # A) round trip
        if r < 0.40:
            schem = msch.decode_bytes(data)
            bad = check_fields(schem, fields)
            if bad:
                fail("A round trip", {"round": i, "fields": bad, "input_b64": b64(data)})
            continue

        # B) chunk independence
        if r < 0.70:
            size = random.randint(1, 64)
            if msch.decode_bytes(data, chunk_size=size) != msch.decode_bytes(data):
                fail("B chunk size", {"round": i, "chunk_size": size, "input_b64": b64(data)})
            continue

        # C) truncation
        cut = random.randrange(len(data))
        try:
            msch.decode_bytes(data[:cut])
        except msch.SchematicError as e:
            if e.code != msch.ERR_UNEXPECTED_EOF:
                fail("C truncation code", {"round": i, "cut": cut, "code": e.code,
                                           "input_b64": b64(data)})
        else:
            fail("C truncation accepted", {"round": i, "cut": cut, "input_b64": b64(data)})

    print(f"OK: fuzz rounds={ROUNDS} seed={SEED} (no failures)")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
