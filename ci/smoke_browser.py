#!/usr/bin/env python3
"""Browser smoke test for the htmleffect PyScript preview page."""

from __future__ import annotations

import os
import re
import sys
import time
import urllib.error
import urllib.request

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

BASE_URL = os.environ.get("HTMLEFFECT_BASE_URL", "http://127.0.0.1:8000").rstrip("/")
SERVER_WAIT_SECONDS = 90
PYSCRIPT_ENTRYPOINT_WAIT_SECONDS = 300
PYSCRIPT_ENTRYPOINT_HEARTBEAT_SECONDS = 15
PYSCRIPT_ENTRYPOINT_POLL_SECONDS = 2
CHECKS_SUMMARY_WAIT_SECONDS = 120
CHECKS_SUMMARY_POLL_SECONDS = 1
SUMMARY_RE = re.compile(r"SUMMARY:\s+(\d+)\s+passed,\s+(\d+)\s+failed")

SAMPLE_MARKUP = '<ul id="smokeList"><li>one</li><li>two</li></ul>'


def log_step(message: str) -> None:
    print(f"[smoke] {message}", flush=True)


def wait_for_server(url: str, timeout_s: int) -> None:
    log_step(f"Waiting for local server at {url} (timeout={timeout_s}s)")
    start = time.time()
    deadline = time.time() + timeout_s
    next_heartbeat = start
    last_error = "server did not respond"

    while time.time() < deadline:
        try:
            with urllib.request.urlopen(f"{url}/index.html", timeout=5) as resp:
                if resp.status == 200:
                    elapsed = int(time.time() - start)
                    log_step(f"Server is reachable after {elapsed}s")
                    return
                last_error = f"unexpected status {resp.status}"
        except (urllib.error.URLError, TimeoutError) as exc:
            last_error = str(exc)

        now = time.time()
        if now >= next_heartbeat:
            elapsed = int(now - start)
            log_step(
                f"Still waiting for server... elapsed={elapsed}s last_error={last_error}"
            )
            next_heartbeat = now + 10

        time.sleep(1)

    raise RuntimeError(f"Timed out waiting for server at {url}: {last_error}")


def _last_non_empty_line(text: str) -> str:
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        return "<no output yet>"
    last = lines[-1]
    if len(last) > 240:
        return f"{last[:237]}..."
    return last


def wait_for_python_entrypoint(page, fn_name: str, timeout_s: int) -> None:
    log_step(f"Waiting for PyScript entrypoint window.{fn_name} (timeout={timeout_s}s)")
    start = time.monotonic()
    deadline = start + timeout_s
    next_heartbeat = start

    while True:
        ready = bool(page.evaluate(f"() => typeof window['{fn_name}'] === 'function'"))
        if ready:
            elapsed = int(time.monotonic() - start)
            log_step(f"PyScript entrypoint window.{fn_name} is ready after {elapsed}s")
            return

        now = time.monotonic()
        if now >= deadline:
            raise RuntimeError(
                f"Timed out waiting for window.{fn_name} after {timeout_s}s; "
                f"status={page.inner_text('#statusBadge')!r}"
            )

        if now >= next_heartbeat:
            elapsed = int(now - start)
            log_step(f"Still waiting for window.{fn_name}... elapsed={elapsed}s")
            next_heartbeat = now + PYSCRIPT_ENTRYPOINT_HEARTBEAT_SECONDS

        time.sleep(PYSCRIPT_ENTRYPOINT_POLL_SECONDS)


def wait_for_checks_summary(page) -> str:
    log_step(f"Waiting for conformance summary (timeout={CHECKS_SUMMARY_WAIT_SECONDS}s)")
    deadline = time.monotonic() + CHECKS_SUMMARY_WAIT_SECONDS
    output_text = ""

    while time.monotonic() < deadline:
        output_text = page.inner_text("#output")
        if SUMMARY_RE.search(output_text):
            return output_text
        time.sleep(CHECKS_SUMMARY_POLL_SECONDS)

    raise RuntimeError(
        "Timed out waiting for conformance summary; "
        f"last_output_line={_last_non_empty_line(output_text)!r}"
    )


def require_summary_ok(output_text: str) -> None:
    match = SUMMARY_RE.search(output_text)
    if not match:
        raise AssertionError("Did not find conformance summary in output")

    passed = int(match.group(1))
    failed = int(match.group(2))
    print(f"Conformance summary: {passed} passed, {failed} failed")
    if failed != 0:
        raise AssertionError(f"Conformance checks reported failures: {failed}")


def check_preview_apply(page) -> None:
    log_step("Filling markup and clicking Apply")
    before = page.inner_html("#preview")
    page.fill("#markupInput", SAMPLE_MARKUP)
    if page.inner_html("#preview") != before:
        raise AssertionError("Preview changed before Apply was clicked")

    page.click("#applyBtn")
    page.wait_for_selector("#preview #smokeList li", timeout=10_000)
    items = page.eval_on_selector_all("#preview #smokeList li", "els => els.length")
    if items != 2:
        raise AssertionError(f"Expected 2 list items in preview, found {items}")

    log_step("Clicking Clear")
    page.click("#clearBtn")
    page.wait_for_function(
        "() => document.getElementById('preview').innerHTML === ''", timeout=10_000
    )


def main() -> int:
    log_step(f"Starting browser smoke checks for {BASE_URL}")
    wait_for_server(BASE_URL, SERVER_WAIT_SECONDS)
    log_step("Launching headless Chromium")

    with sync_playwright() as playwright:
        browser = playwright.chromium.launch(headless=True)
        context = browser.new_context()

        page_errors: list[str] = []
        browser_console_errors: list[str] = []

        def on_console(msg) -> None:
            text = msg.text
            if msg.type == "error":
                browser_console_errors.append(text)
                log_step(f"Browser console error: {text}")

        page = context.new_page()
        page.on("pageerror", lambda exc: page_errors.append(str(exc)))
        page.on("console", on_console)

        try:
            log_step("Opening /index.html")
            page.goto(
                f"{BASE_URL}/index.html", wait_until="domcontentloaded", timeout=180_000
            )
            page.wait_for_selector("#checksBtn", timeout=120_000)
            wait_for_python_entrypoint(
                page, "run_checks", timeout_s=PYSCRIPT_ENTRYPOINT_WAIT_SECONDS
            )

            log_step("Clicking Run checks")
            page.click("#checksBtn")
            output_text = wait_for_checks_summary(page)
            require_summary_ok(output_text)

            check_preview_apply(page)

        except PlaywrightTimeoutError as exc:
            log_step(f"Playwright timeout: {exc}")
            return 1
        except Exception as exc:
            log_step(f"Smoke check failed: {type(exc).__name__}: {exc}")
            return 1
        finally:
            browser.close()

        if browser_console_errors:
            log_step("Captured browser console errors:")
            for err in browser_console_errors:
                log_step(f"- {err}")

        if page_errors:
            log_step("Detected browser page errors:")
            for err in page_errors:
                log_step(f"- {err}")
            return 1

    log_step("Browser smoke checks passed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
