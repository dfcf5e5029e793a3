#!/usr/bin/env python3
"""
Evaluation runner for the Huffman coder.

This evaluation script:
- Runs the pytest suite in tests/ and collects per-test outcomes
- Builds a coder for each sample in a small corpus and records the
  compression ratio, expected code length and round-trip status
- Writes a structured JSON report with environment metadata

Run with:
    python evaluation/evaluation.py [--output PATH]
"""
import argparse
import json
import logging
import os
import platform
import subprocess
import sys
import traceback
import uuid
from datetime import datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import huffman_config
from huffman_errors import HuffmanError
from huffman_service import HuffmanService

log = logging.getLogger(__name__)

SAMPLE_CORPUS = {
    "scenario": "aaabbc",
    "two_symbols": "abababab",
    "pangram": "the quick brown fox jumps over the lazy dog",
    "skewed": "a" * 500 + "b" * 60 + "c" * 12 + "d" * 3 + "e",
    "log_line": "2024-01-01 12:00:00 INFO request served in 12ms status=200 path=/index.html",
}


def generate_run_id():
    """Generate a short unique run ID."""
    return uuid.uuid4().hex[:8]


def get_environment_info():
    """Collect environment information for the report."""
    return {
        "python_version": platform.python_version(),
        "platform": platform.platform(),
        "os": platform.system(),
        "architecture": platform.machine(),
        "hostname": platform.node(),
        "symbol_width": huffman_config.SYMBOL_WIDTH,
    }


def parse_pytest_verbose_output(output):
    """Parse pytest verbose output to extract test results."""
    tests = []
    for line in output.split("\n"):
        line_stripped = line.strip()
        # Match lines like: tests/test_huffman_service.py::test_round_trip PASSED
        if "::" not in line_stripped:
            continue
        for status_word, outcome in (
            (" PASSED", "passed"),
            (" FAILED", "failed"),
            (" ERROR", "error"),
            (" SKIPPED", "skipped"),
        ):
            if status_word in line_stripped:
                nodeid = line_stripped.split(status_word)[0].strip()
                tests.append({
                    "nodeid": nodeid,
                    "name": nodeid.split("::")[-1],
                    "outcome": outcome,
                })
                break
    return tests


def summarize(tests):
    return {
        "total": len(tests),
        "passed": sum(1 for t in tests if t["outcome"] == "passed"),
        "failed": sum(1 for t in tests if t["outcome"] == "failed"),
        "errors": sum(1 for t in tests if t["outcome"] == "error"),
        "skipped": sum(1 for t in tests if t["outcome"] == "skipped"),
    }


def run_pytest(tests_dir, timeout=300):
    """Run pytest on the tests/ folder and return parsed results."""
    cmd = [sys.executable, "-m", "pytest", str(tests_dir), "-v", "--tb=short"]
    env = os.environ.copy()
    env["PYTHONPATH"] = str(PROJECT_ROOT)

    print(f"\n{'=' * 60}")
    print("RUNNING TESTS")
    print(f"{'=' * 60}")
    print(" ".join(cmd))

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            cwd=str(PROJECT_ROOT),
            env=env,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        print("❌ Test execution timed out")
        return {"success": False, "exit_code": -1, "tests": [],
                "summary": {"error": "Test execution timed out"}, "stdout": "", "stderr": ""}

    tests = parse_pytest_verbose_output(result.stdout)
    summary = summarize(tests)
    print(f"\nResults: {summary['passed']} passed, {summary['failed']} failed, "
          f"{summary['errors']} errors, {summary['skipped']} skipped (total: {summary['total']})")

    return {
        "success": result.returncode == 0,
        "exit_code": result.returncode,
        "tests": tests,
        "summary": summary,
        "stdout": result.stdout[-3000:],
        "stderr": result.stderr[-1000:],
    }


def measure_sample(name, text):
    """Build a coder from ``text`` and compress it with itself."""
    try:
        coder = HuffmanService.from_text(text)
        encoded = coder.compress(text)
        decoded = coder.decompress(encoded)
    except HuffmanError as e:
        log.warning("sample %s rejected: %s", name, e)
        return {"name": name, "ok": False, "error": str(e)}

    return {
        "name": name,
        "ok": decoded == text,
        "symbols": len(text),
        "alphabet_size": len(coder.alphabet),
        "encoded_bits": len(encoded),
        "compression_ratio": round(coder.compression_ratio(), 6),
        "expected_encoding_length": round(coder.expected_encoding_length(), 6),
    }


def run_corpus(corpus):
    print(f"\n{'=' * 60}")
    print("SAMPLE CORPUS")
    print(f"{'=' * 60}")
    samples = []
    for name, text in corpus.items():
        sample = measure_sample(name, text)
        samples.append(sample)
        if sample["ok"]:
            print(f"  ✅ {name}: ratio {sample['compression_ratio']:.4f}, "
                  f"{sample['expected_encoding_length']:.4f} bits/symbol")
        else:
            print(f"  ❌ {name}: {sample.get('error', 'round trip mismatch')}")
    return {"success": all(s["ok"] for s in samples), "samples": samples}


def generate_output_path():
    """Generate output path in format: evaluation/YYYY-MM-DD/HH-MM-SS/report.json"""
    now = datetime.now()
    output_dir = PROJECT_ROOT / "evaluation" / now.strftime("%Y-%m-%d") / now.strftime("%H-%M-%S")
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir / "report.json"


def main(argv=None):
    """Main entry point for evaluation."""
    parser = argparse.ArgumentParser(description="Run the Huffman coder evaluation")
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output JSON file path (default: evaluation/YYYY-MM-DD/HH-MM-SS/report.json)",
    )
    parser.add_argument("--skip-tests", action="store_true", help="Only measure the sample corpus")
    args = parser.parse_args(argv)

    huffman_config.configure_logging()

    run_id = generate_run_id()
    started_at = datetime.now()
    print(f"Run ID: {run_id}")
    print(f"Started at: {started_at.isoformat()}")

    try:
        results = {"corpus": run_corpus(SAMPLE_CORPUS)}
        if not args.skip_tests:
            results["tests"] = run_pytest(PROJECT_ROOT / "tests")
        success = all(part["success"] for part in results.values())
        error_message = None if success else "Evaluation failed"
    except Exception as e:
        print(f"\nERROR: {str(e)}")
        traceback.print_exc()
        results = None
        success = False
        error_message = str(e)

    finished_at = datetime.now()
    duration = (finished_at - started_at).total_seconds()

    report = {
        "run_id": run_id,
        "started_at": started_at.isoformat(),
        "finished_at": finished_at.isoformat(),
        "duration_seconds": round(duration, 6),
        "success": success,
        "error": error_message,
        "environment": get_environment_info(),
        "results": results,
    }

    output_path = Path(args.output) if args.output else generate_output_path()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2)
    print(f"\n✅ Report saved to: {output_path}")
    print(f"Duration: {duration:.2f}s")
    print(f"Success: {'✅ YES' if success else '❌ NO'}")

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
