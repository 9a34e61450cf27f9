"""Start an SQL language server and relay its stdio, one frame at a time."""

from __future__ import annotations

import argparse
import logging
import os
import re
import subprocess
import sys
import threading
import time
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, Sequence

log = logging.getLogger("sql-lsp-wrapper")

DEFAULT_SERVER = "sql-language-server"
CONFIG_FILE = ".sqllsrc.json"
SERVER_PATH_ENV = "SQL_LANGUAGE_SERVER_PATH"
CONFIG_PATH_ENV = "SQL_LSP_CONFIG_PATH"
BASE_ARGS = ("up", "--method", "stdio", "--debug", "false")
NO_PERSONAL_CONFIG = "--no-personal-config"
PARENT_SEARCH_DEPTH = 5
STARTUP_GRACE_SECONDS = 0.1
PREVIEW_BYTES = 200
CHUNK_SIZE = 4096

_HEADER_END = b"\r\n\r\n"
_CONTENT_LENGTH = "Content-Length:"
_UNSIGNED = re.compile(r"\+?[0-9]+")


def server_args(config_present: bool) -> list[str]:
    """Arguments for the server; without a config file personal config is disabled."""
    args = list(BASE_ARGS)
    if not config_present:
        args.append(NO_PERSONAL_CONFIG)
    return args


def _local_binary(directory: Path) -> Path:
    return directory / "node_modules" / ".bin" / DEFAULT_SERVER


def candidate_commands(server: str, cwd: Path, args: Sequence[str]) -> list[list[str]]:
    """Commands to try in order: the server itself, local installs, then npx."""
    commands = [[server, *args]]
    directories = [cwd, *cwd.parents][:PARENT_SEARCH_DEPTH]
    seen: set[Path] = set()
    for directory in directories:
        binary = _local_binary(directory)
        if binary in seen or not binary.exists():
            continue
        seen.add(binary)
        commands.append([str(binary), *args])
    commands.append(["npx", DEFAULT_SERVER, *args])
    return commands


def parse_content_length(header: bytes | str) -> int:
    """The Content-Length of a header block; 0 when absent or malformed."""
    text = header.decode("utf-8", "replace") if isinstance(header, bytes) else header
    length = 0
    for line in text.split("\n"):
        line = line.rstrip("\r")
        if not line.startswith(_CONTENT_LENGTH):
            continue
        value = line.split(":")[1].strip()
        length = int(value) if _UNSIGNED.fullmatch(value) else 0
        log.debug("Content-Length: %d", length)
    return length


class FrameSplitter:
    """Splits a server's output stream into header blocks and message bodies.

    A body is always at least one byte long, so a zero or missing length
    consumes a single byte after the header.
    """

    def __init__(self) -> None:
        self._header = bytearray()
        self._body = bytearray()
        self._in_header = True
        self._length = 0

    def feed(self, data: bytes) -> list[bytes]:
        """Take more bytes and return every header or body they complete."""
        chunks: list[bytes] = []
        data = bytes(data)
        pos = 0
        while pos < len(data):
            if self._in_header:
                search_from = max(len(self._header) - len(_HEADER_END) + 1, 0)
                combined = self._header + data[pos:]
                found = combined.find(_HEADER_END, search_from)
                if found < 0:
                    self._header = combined
                    break
                end = found + len(_HEADER_END)
                header = bytes(combined[:end])
                pos += end - len(self._header)
                log.debug("LSP Header: %s", header.decode("utf-8", "replace").strip())
                self._length = parse_content_length(header)
                chunks.append(header)
                self._header = bytearray()
                self._body = bytearray()
                self._in_header = False
            else:
                wanted = max(self._length, 1)
                take = data[pos:pos + wanted - len(self._body)]
                self._body += take
                pos += len(take)
                if len(self._body) >= wanted:
                    body = bytes(self._body)
                    log.debug(
                        "LSP Content (first %d chars): %s",
                        PREVIEW_BYTES,
                        body[:PREVIEW_BYTES].decode("utf-8", "replace"),
                    )
                    chunks.append(body)
                    self._body = bytearray()
                    self._in_header = True
                    self._length = 0
        return chunks


def _server_env() -> dict[str, str]:
    env = dict(os.environ)
    env["NODE_ENV"] = "production"
    env["DEBUG"] = ""
    return env


def start_server(candidates: Iterable[Sequence[str]]) -> subprocess.Popen:
    """Start the first command that launches; raise OSError when none does."""
    last_error: Optional[OSError] = None
    for command in candidates:
        log.info("Trying command: %s", " ".join(command))
        try:
            process = subprocess.Popen(
                list(command),
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                env=_server_env(),
            )
        except OSError as exc:
            log.info("Command failed: %s", exc)
            last_error = exc
            continue
        log.info("Started: %s", command[0])
        return process
    raise OSError(f"failed to start {DEFAULT_SERVER}: {last_error}") from last_error


def _log_stderr(stream: BinaryIO) -> None:
    for line in iter(stream.readline, b""):
        log.info("[SQL-LSP stderr] %s", line.decode("utf-8", "replace").rstrip("\n"))


def _forward_stdin(source: BinaryIO, sink: BinaryIO) -> None:
    try:
        while True:
            data = source.read1(CHUNK_SIZE)
            if not data:
                break
            log.debug(
                "Sending to LSP (first %d chars): %s",
                PREVIEW_BYTES,
                data[:PREVIEW_BYTES].decode("utf-8", "replace"),
            )
            sink.write(data)
            sink.flush()
    except (OSError, ValueError):
        pass
    finally:
        try:
            sink.close()
        except OSError:
            pass


def _relay_stdout(source: BinaryIO, sink: BinaryIO) -> None:
    splitter = FrameSplitter()
    try:
        while True:
            data = source.read1(CHUNK_SIZE)
            if not data:
                break
            for chunk in splitter.feed(data):
                sink.write(chunk)
                sink.flush()
    except OSError:
        pass


def _report_failure(server: str, error: OSError) -> None:
    lines = [
        f"Failed to start {DEFAULT_SERVER}: {error}",
        "Tried:",
        f"  1. Direct command: {server}",
        f"  2. Local node_modules/.bin/{DEFAULT_SERVER}",
        "  3. Parent directories node_modules",
        f"  4. npx {DEFAULT_SERVER}",
        "",
        f"Please install it with: npm install -g {DEFAULT_SERVER}",
        f"Or install locally: npm install {DEFAULT_SERVER}",
    ]
    print("\n".join(lines), file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the language server and relay stdio until either side closes."""
    parser = argparse.ArgumentParser(
        prog="sql-lsp-wrapper",
        description="Relay an SQL language server over stdio.",
    )
    parser.parse_args(argv)
    logging.basicConfig(
        stream=sys.stderr, level=logging.DEBUG, format="sql-lsp-wrapper: %(message)s"
    )

    cwd = Path.cwd()
    log.info("Starting...")
    log.info("Current directory: %s", cwd)
    config_path = os.environ.get(CONFIG_PATH_ENV)
    if config_path is not None:
        log.info("Using custom config from: %s", config_path)

    server = os.environ.get(SERVER_PATH_ENV, DEFAULT_SERVER)
    config_present = Path(CONFIG_FILE).exists()
    if config_present:
        log.info("Found %s in current directory, using it for LSP configuration", CONFIG_FILE)
    else:
        log.info("No %s found, running without database configuration", CONFIG_FILE)

    candidates = candidate_commands(server, cwd, server_args(config_present))
    try:
        process = start_server(candidates)
    except OSError as exc:
        _report_failure(server, exc)
        return 1

    time.sleep(STARTUP_GRACE_SECONDS)
    status = process.poll()
    if status is not None:
        log.error("ERROR - %s exited immediately with status: %s", DEFAULT_SERVER, status)
        return 1
    log.info("%s process is running", DEFAULT_SERVER)

    stderr_thread = threading.Thread(target=_log_stderr, args=(process.stderr,), daemon=True)
    stderr_thread.start()
    stdin_thread = threading.Thread(
        target=_forward_stdin, args=(sys.stdin.buffer, process.stdin), daemon=True
    )
    stdin_thread.start()

    _relay_stdout(process.stdout, sys.stdout.buffer)

    stdin_thread.join()
    process.wait()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())