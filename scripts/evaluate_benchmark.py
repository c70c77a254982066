from __future__ import annotations

import argparse
import time

import pandas as pd

from zee.entrypoints.cli import build_orchestrator
from zee.errors import ParseError
from zee.evaluation.metrics import EvaluationResult, success_rate, summarize_run
from zee.memory.registry import RunRegistry
from zee.telemetry.logging import setup_logging
from zee.utils.llm_clients import build_llm_client
from zee.utils.settings import load_config
from zee.utils.setup import load_api_keys


def load_goal_column(file_path: str, goal_col: str) -> pd.Series:
    if file_path.endswith(".csv"):
        df = pd.read_csv(file_path)
    elif file_path.endswith(".xlsx") or file_path.endswith(".xls"):
        df = pd.read_excel(file_path)
    else:
        raise ValueError("Unsupported file type. Please provide a CSV or Excel file.")

    if goal_col not in df.columns:
        raise KeyError(f"Column '{goal_col}' not found in the file.")
    return df[goal_col].dropna()


def main():
    parser = argparse.ArgumentParser(description="Run every goal in a table through the workflow.")
    parser.add_argument("path", help="CSV or Excel file with one goal per row.")
    parser.add_argument("--column", default="goal")
    parser.add_argument("--env", default="base")
    args = parser.parse_args()

    config = load_config(args.env)
    setup_logging(config.logging.level)
    load_api_keys()
    llm_client = build_llm_client(config.llm)
    registry = RunRegistry()

    results = []
    for idx, goal in load_goal_column(args.path, args.column).items():
        run_id = str(idx)
        orchestrator = registry.create(
            run_id, lambda goal=goal: build_orchestrator(goal, config, llm_client)
        )
        started = time.perf_counter()
        try:
            summary = summarize_run(orchestrator.run())
            success = summary.succeeded
            print(f"[{run_id}] iterations={summary.iterations} errors={summary.errors}")
        except ParseError as exc:
            print(f"[{run_id}] failed to start: {exc}")
            success = False
        finally:
            registry.evict(run_id)
        latency = int((time.perf_counter() - started) * 1000)
        results.append(EvaluationResult(task_id=run_id, success=success, latency_ms=latency))

    print(f"Success rate: {success_rate(results):.2%}")


if __name__ == "__main__":
    main()
