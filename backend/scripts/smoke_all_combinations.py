#!/usr/bin/env python3
"""Smoke test every input/output register combination against a running server.

Usage:
    python backend/scripts/smoke_all_combinations.py [--url http://localhost:3001] [--model fast]
"""

import argparse
import itertools
import sys

import httpx

from triglot.utils.text import count_tagged_sentences

SAMPLES = {
    "ancient": "学而时习之，不亦说乎？有朋自远方来，不亦乐乎？",
    "modern": "春天来了。花开了，鸟儿在歌唱。",
    "english": "To be, or not to be,\nthat is the question.",
}

LANGUAGES = list(SAMPLES)


def combinations():
    """Every input language paired with every non-empty set of other languages."""
    for source in LANGUAGES:
        others = [lang for lang in LANGUAGES if lang != source]
        for size in range(1, len(others) + 1):
            for targets in itertools.combinations(others, size):
                yield source, list(targets)


def run(url: str, model: str, timeout: float) -> bool:
    endpoint = f"{url.rstrip('/')}/api/segment-and-translate"
    all_ok = True

    with httpx.Client(timeout=timeout) as client:
        for source, targets in combinations():
            label = f"{source} -> {', '.join(targets)}"
            try:
                response = client.post(
                    endpoint,
                    json={
                        "text": SAMPLES[source],
                        "inputLanguage": source,
                        "outputLanguages": targets,
                        "model": model,
                    },
                )
            except httpx.HTTPError as e:
                print(f"FAIL {label}: {e}")
                all_ok = False
                continue

            if response.status_code != 200:
                print(f"FAIL {label}: HTTP {response.status_code} {response.text}")
                all_ok = False
                continue

            body = response.json()
            expected = count_tagged_sentences(body["original"]["text"])
            counts = {
                lang: count_tagged_sentences(text)
                for lang, text in body["translations"].items()
            }
            aligned = all(count == expected for count in counts.values())
            status = "OK  " if aligned and expected else "WARN"
            print(f"{status} {label}: original={expected} translations={counts}")
            all_ok = all_ok and expected > 0

    return all_ok


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--url", default="http://localhost:3001")
    parser.add_argument("--model", default="fast", choices=["default", "fast", "opus", "sonnet"])
    parser.add_argument("--timeout", type=float, default=180.0)
    args = parser.parse_args()

    ok = run(args.url, args.model, args.timeout)
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
