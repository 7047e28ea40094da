"""Command line interface for resume-review.

Reviews a plain-text resume with the configured LLM provider and prints the
result as JSON::

    resume-review resume.txt --job job.txt --provider claude
    resume-review --test-connection --provider ollama --model llama3
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import settings
from .exceptions import AnalysisError, ProviderError
from .llm import check_connection
from .pipeline import provider_config_from_settings, review_resume

logger = logging.getLogger("resume_review.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume-review",
        description="Parse, analyze and job-match a resume with an LLM provider.",
    )
    parser.add_argument("resume", nargs="?", help="Path to a plain-text resume")
    parser.add_argument("--job", help="Path to a plain-text job description to match against")
    parser.add_argument("--provider", help="openai, claude, gemini or ollama (default: LLM_PROVIDER)")
    parser.add_argument("--model", help="Model name (default: provider default or LLM_MODEL)")
    parser.add_argument(
        "--test-connection",
        action="store_true",
        help="Parse a small sample resume to check the provider configuration",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = build_parser()
    args = parser.parse_args(argv)
    provider_config = provider_config_from_settings(provider=args.provider, model=args.model)

    try:
        if args.test_connection:
            parsed = check_connection(provider_config)
            print(parsed.as_json())
            return 0

        if not args.resume:
            parser.error("a resume path is required unless --test-connection is given")

        resume_text = Path(args.resume).read_text(encoding="utf-8")
        job_description = Path(args.job).read_text(encoding="utf-8") if args.job else None
        review = review_resume(resume_text, provider_config, job_description)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not read input file: {e}")
        return 1
    except (ProviderError, AnalysisError) as e:
        logger.error(f"Resume review failed: {e}")
        return 1

    print(review.model_dump_json(by_alias=True, exclude_none=True, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
