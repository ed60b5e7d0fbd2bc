from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

from .config import RecommenderConfig
from .engine import MovieRecommender
from .errors import LoadFailure, RecommenderError
from .ranking import ScoredMovie
from .utils import setup_logging


logger = logging.getLogger(__name__)


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return value


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Movie recommendations from attribute vectors and user ratings")
    p.add_argument("--config", type=Path, default=None, help="Path to config YAML (default: repo config.yaml)")
    p.add_argument("--attributes", type=Path, default=None, help="Override the movie attributes file")
    p.add_argument("--ratings", type=Path, default=None, help="Override the user ratings file")
    p.add_argument("--log-level", type=str, default=None, help="DEBUG/INFO/WARNING; default from config")

    sub = p.add_subparsers(dest="command", required=True)

    content = sub.add_parser("content", help="Recommend by content (preference vector)")
    content.add_argument("--user", required=True, help="User name from the ratings file")
    content.add_argument("--top-n", type=_positive_int, default=1, help="How many ranked movies to show")

    predict = sub.add_parser("predict", help="Predict a user's rating for a movie (item CF)")
    predict.add_argument("--movie", required=True, help="Movie name")
    predict.add_argument("--user", required=True, help="User name from the ratings file")
    predict.add_argument("--k", type=_positive_int, default=None, help="Number of similar rated movies; default from config")

    cf = sub.add_parser("cf", help="Recommend by item-based collaborative filtering")
    cf.add_argument("--user", required=True, help="User name from the ratings file")
    cf.add_argument("--k", type=_positive_int, default=None, help="Number of similar rated movies; default from config")
    cf.add_argument("--top-n", type=_positive_int, default=1, help="How many ranked movies to show")
    return p


def _load_config(args: argparse.Namespace) -> RecommenderConfig:
    if args.config is None and args.attributes is not None and args.ratings is not None:
        return RecommenderConfig(attributes_path=Path(args.attributes), ratings_path=Path(args.ratings))

    cfg = RecommenderConfig.from_yaml(args.config)
    if args.attributes is None and args.ratings is None:
        return cfg
    return RecommenderConfig(
        attributes_path=Path(args.attributes) if args.attributes is not None else cfg.attributes_path,
        ratings_path=Path(args.ratings) if args.ratings is not None else cfg.ratings_path,
        default_k=cfg.default_k,
        log_level=cfg.log_level,
        missing_marker=cfg.missing_marker,
    )


def _print_ranked(title: str, ranked: list[ScoredMovie]) -> None:
    print(f"\n=== {title} ===")
    if ranked:
        df = pd.DataFrame([r.__dict__ for r in ranked])
        print(df.to_string(index=False))
    else:
        print("No recommendations found.")


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    cfg = _load_config(args)
    setup_logging(args.log_level or cfg.log_level)

    try:
        rec = MovieRecommender.from_config(cfg)
    except LoadFailure as exc:
        logger.error("Load failed: %s", exc)
        return 1

    k = int(args.k) if getattr(args, "k", None) is not None else cfg.default_k
    try:
        if args.command == "content":
            _print_ranked(f"Content recommendations for {args.user}", rec.rank_by_content(args.user, top_n=args.top_n))
            print(f"\nRecommended: {rec.recommend_by_content(args.user)}")
        elif args.command == "predict":
            score = rec.predict_rating(args.movie, args.user, k)
            print(f"Predicted rating of {args.movie} for {args.user} (k={k}): {score:.4f}")
        elif args.command == "cf":
            _print_ranked(f"CF recommendations for {args.user} (k={k})", rec.rank_by_cf(args.user, k, top_n=args.top_n))
            print(f"\nRecommended: {rec.recommend_by_cf(args.user, k)}")
    except (RecommenderError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
