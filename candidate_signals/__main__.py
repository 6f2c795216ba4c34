#!/usr/bin/env python3
"""
Main entry point for the candidate signal analysis core.
Allows running the package with: python -m candidate_signals SESSION.json
"""
import json
import sys
from typing import Any, Dict, List, Optional

from .config import get_config
from .interview import BiasContext, Message, analyze_session
from .utils import setup_logging

USAGE = (
    "Usage: python -m candidate_signals SESSION.json "
    "[--log-file=PATH] [--context=job_description|interview_question|candidate_evaluation]"
)


def load_session(path: str) -> Dict[str, Any]:
    """
    Read a session file.

    Returns:
        Dictionary with messages, scores, weights and text

    Raises:
        ValueError: If the file content is not a valid session
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError("Session file must contain a JSON object")

    raw_messages = data.get("messages", [])
    if not isinstance(raw_messages, list):
        raise ValueError("'messages' must be a list")

    messages: List[Message] = []
    for index, item in enumerate(raw_messages):
        if not isinstance(item, dict):
            raise ValueError(f"Message {index} must be an object")
        messages.append(Message.from_dict(item, index))
    messages.sort(key=lambda m: m.timestamp)

    for key in ("scores", "weights"):
        if data.get(key) is not None and not isinstance(data[key], dict):
            raise ValueError(f"'{key}' must be an object keyed by category")
    if data.get("text") is not None and not isinstance(data["text"], str):
        raise ValueError("'text' must be a string")

    return {
        "messages": messages,
        "scores": data.get("scores"),
        "weights": data.get("weights"),
        "text": data.get("text"),
    }


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line interface for session analysis."""
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        config = get_config()
    except ValueError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1

    log_file = config.log_file
    context = None
    paths = []
    for arg in args:
        if arg.startswith("--log-file="):
            log_file = arg.split("=", 1)[1]
        elif arg.startswith("--context="):
            try:
                context = BiasContext.parse(arg.split("=", 1)[1])
            except ValueError:
                print(f"Invalid context value. {USAGE}", file=sys.stderr)
                return 1
        elif arg in ("-h", "--help"):
            print(USAGE)
            return 0
        else:
            paths.append(arg)

    if len(paths) != 1:
        print(USAGE, file=sys.stderr)
        return 1

    setup_logging(log_file, config.log_level)

    try:
        session = load_session(paths[0])
        report = analyze_session(
            session["messages"],
            raw_scores=session["scores"],
            weights=session["weights"],
            text=session["text"],
            context=context,
        )
    except (OSError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        print(f"Could not analyze session: {e}", file=sys.stderr)
        return 1

    print(json.dumps(report.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
