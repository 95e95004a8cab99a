"""Command-line interface for the AES engine.

Usage:
    aes-engine list
    aes-engine key-schedule --key <hex>
    aes-engine encrypt --key <hex> --pt <hex> [--mode cbc] [--iv <hex>] [--verbose]
    aes-engine decrypt --key <hex> --ct <hex> [--iv-transport separate --iv <hex>]
    aes-engine validate --n 100 --seed 42
"""

from __future__ import annotations

import contextlib
import logging
import random
import secrets
import sys

import click

from . import DEFAULT_KEY_HEX, DEFAULT_PT_HEX, __version__
from .aes_core import encrypt_block
from .cipher import Cipher
from .config import IV_TRANSPORTS, CipherConfig
from .errors import AesError
from .key_schedule import KeySchedule
from .modes import MODES, list_modes
from .padding import PADDING_SCHEMES, list_padding_schemes
from .reference import reference_decrypt, reference_encrypt
from .trace import TraceRecorder, print_header, print_result
from .utils import bytes_to_hex, format_state_grid, hex_to_bytes, state_to_hex
from .vectors import CBC_TEST_VECTORS, FIPS_197_TEST_VECTORS, KEY_EXPANSION_VECTORS

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _parse_hex(value: str, what: str) -> bytes:
    try:
        return hex_to_bytes(value)
    except ValueError as e:
        _fail(f"Invalid {what} hex: {e}")


def _build_config(mode: str, padding: str, iv_transport: str) -> CipherConfig:
    try:
        return CipherConfig(mode=mode, padding=padding, iv_transport=iv_transport)
    except ValueError as e:
        _fail(str(e))


def _open_trace(path: str | None):
    if path:
        return open(path, "w")
    return contextlib.nullcontext(None)


def _common_options(func):
    """Options shared by 'encrypt' and 'decrypt'."""
    options = [
        click.option("--key", default=DEFAULT_KEY_HEX, show_default=True,
                     help="AES key as hex (16, 24 or 32 bytes)"),
        click.option("--mode", type=click.Choice(list(MODES)), default="cbc",
                     show_default=True, help="Chaining mode"),
        click.option("--padding", type=click.Choice(list(PADDING_SCHEMES)),
                     default="pkcs7", show_default=True, help="Padding scheme"),
        click.option("--iv", default=None,
                     help="16-byte IV as hex (default: random for encrypt)"),
        click.option("--iv-transport", type=click.Choice(IV_TRANSPORTS),
                     default="prepend", show_default=True,
                     help="prepend: IV || ciphertext; separate: IV passed on its own"),
        click.option("--verbose", "-v", is_flag=True,
                     help="Print the state after every round operation"),
        click.option("--trace", "trace_path", type=click.Path(dir_okay=False),
                     default=None, help="Write a JSON Lines trace to FILE"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="aes-engine")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level for library diagnostics",
)
def main(log_level: str) -> None:
    """AES-128/192/256 block cipher engine with CBC/ECB and PKCS#7."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command(name="list")
def list_cmd() -> None:
    """List available chaining modes and padding schemes."""
    click.echo("Chaining modes:")
    for mode in list_modes():
        click.echo(f"  {mode['name']:8s} {mode['description']}")
    click.echo("")
    click.echo("Padding schemes:")
    for scheme in list_padding_schemes():
        click.echo(f"  {scheme['name']:8s} {scheme['description']}")


@main.command(name="key-schedule")
@click.option("--key", default=DEFAULT_KEY_HEX, show_default=True,
              help="AES key as hex (16, 24 or 32 bytes)")
@click.option("--grid", is_flag=True, help="Show each round key as a 4x4 grid")
def key_schedule_cmd(key: str, grid: bool) -> None:
    """Print every round key of the expanded schedule."""
    key_bytes = _parse_hex(key, "key")
    try:
        schedule = KeySchedule(key_bytes)
    except AesError as e:
        _fail(str(e))

    click.echo(f"AES-{schedule.key_size * 8}: {schedule.rounds} rounds, "
               f"{len(schedule.words)} words")
    for round_num, round_key in enumerate(schedule.round_keys()):
        click.echo(f"Round {round_num:2d}: {state_to_hex(round_key)}")
        if grid:
            click.echo(format_state_grid(round_key))


@main.command()
@_common_options
@click.option("--pt", default=None, help="Plaintext as hex (default: FIPS-197 block)")
@click.option("--text", default=None, help="Plaintext as a UTF-8 string")
def encrypt(key, mode, padding, iv, iv_transport, verbose, trace_path, pt, text) -> None:
    """Encrypt a plaintext and print the ciphertext as hex."""
    if pt is not None and text is not None:
        _fail("Give either --pt or --text, not both")

    key_bytes = _parse_hex(key, "key")
    if text is not None:
        plaintext = text.encode("utf-8")
    else:
        plaintext = _parse_hex(pt if pt is not None else DEFAULT_PT_HEX, "plaintext")
    iv_bytes = _parse_hex(iv, "IV") if iv is not None else None
    config = _build_config(mode, padding, iv_transport)

    with _open_trace(trace_path) as trace_file:
        tracer = None
        if verbose or trace_file:
            tracer = TraceRecorder(verbose=verbose, trace_file=trace_file)
        try:
            cipher = Cipher.from_config(key_bytes, config, iv=iv_bytes, tracer=tracer)
            if verbose:
                print_header(f"AES-{cipher.schedule.key_size * 8} {mode.upper()} encrypt")
            ciphertext = cipher.encrypt(plaintext)
        except AesError as e:
            _fail(str(e))

    if verbose:
        print_result("Ciphertext", bytes_to_hex(ciphertext), len(ciphertext) // 16)

    if cipher.iv is None:
        click.echo(bytes_to_hex(ciphertext))
    elif config.iv_transport == "prepend":
        click.echo(bytes_to_hex(cipher.iv + ciphertext))
    else:
        click.echo(f"iv: {bytes_to_hex(cipher.iv)}")
        click.echo(f"ciphertext: {bytes_to_hex(ciphertext)}")


@main.command()
@_common_options
@click.option("--ct", required=True, help="Ciphertext as hex")
@click.option("--as-text", is_flag=True, help="Print plaintext as UTF-8 instead of hex")
def decrypt(key, mode, padding, iv, iv_transport, verbose, trace_path, ct, as_text) -> None:
    """Decrypt a ciphertext and print the plaintext."""
    key_bytes = _parse_hex(key, "key")
    data = _parse_hex(ct, "ciphertext")
    config = _build_config(mode, padding, iv_transport)

    if config.requires_iv and config.iv_transport == "separate" and iv is None:
        _fail("--iv is required with --iv-transport separate")
    if config.requires_iv and config.iv_transport == "prepend" and iv is not None:
        _fail("--iv cannot be combined with --iv-transport prepend; "
              "the IV is read from the first ciphertext block")
    iv_bytes = _parse_hex(iv, "IV") if iv is not None else None

    with _open_trace(trace_path) as trace_file:
        tracer = None
        if verbose or trace_file:
            tracer = TraceRecorder(verbose=verbose, trace_file=trace_file)
        try:
            cipher = Cipher.from_config(key_bytes, config, iv=iv_bytes, tracer=tracer)
            if verbose:
                print_header(f"AES-{cipher.schedule.key_size * 8} {mode.upper()} decrypt")
            if config.requires_iv and config.iv_transport == "prepend":
                plaintext = cipher.unseal(data)
            else:
                plaintext = cipher.decrypt(data)
        except AesError as e:
            _fail(str(e))

    if verbose:
        print_result("Plaintext", bytes_to_hex(plaintext), len(data) // 16)

    if as_text:
        click.echo(plaintext.decode("utf-8", errors="replace"))
    else:
        click.echo(bytes_to_hex(plaintext))


@main.command()
@click.option("--n", "num_tests", type=int, default=100, show_default=True,
              help="Number of random round-trip tests")
@click.option("--seed", type=int, default=None, help="Random seed for reproducibility")
@click.option("--verbose", "-v", is_flag=True, help="Show every passing vector")
def validate(num_tests: int, seed: int | None, verbose: bool) -> None:
    """Validate against FIPS-197, SP 800-38A and PyCryptodome."""
    failures = 0

    click.echo("Running FIPS-197 block tests...")
    for i, vec in enumerate(FIPS_197_TEST_VECTORS):
        got = encrypt_block(vec["plaintext"], KeySchedule(vec["key"]))
        if got == vec["ciphertext"]:
            if verbose:
                click.echo(f"  Block test {i+1}: PASS")
        else:
            failures += 1
            click.echo(f"  Block test {i+1}: FAIL - expected "
                       f"{vec['ciphertext'].hex()}, got {got.hex()}")

    click.echo("Running FIPS-197 key expansion tests...")
    for i, vec in enumerate(KEY_EXPANSION_VECTORS):
        words = KeySchedule(vec["key"]).words
        ok = len(words) == vec["total_words"] and all(
            bytes(words[index]) == word for index, word in vec["words"].items()
        )
        if not ok:
            failures += 1
            click.echo(f"  Key expansion test {i+1}: FAIL")
        elif verbose:
            click.echo(f"  Key expansion test {i+1}: PASS")

    click.echo("Running SP 800-38A CBC tests...")
    for i, vec in enumerate(CBC_TEST_VECTORS):
        cipher = Cipher(vec["key"], mode="cbc", padding="none", iv=vec["iv"])
        got = cipher.encrypt(vec["plaintext"])
        if got != vec["ciphertext"] or cipher.decrypt(got) != vec["plaintext"]:
            failures += 1
            click.echo(f"  CBC test {i+1}: FAIL")
        elif verbose:
            click.echo(f"  CBC test {i+1}: PASS")

    click.echo(f"\nRunning {num_tests} random tests against PyCryptodome...")
    if seed is not None:
        rng = random.Random(seed)
        random_bytes = lambda n: bytes(rng.randint(0, 255) for _ in range(n))  # noqa: E731
    else:
        rng = random.SystemRandom()
        random_bytes = secrets.token_bytes

    random_failed = 0
    for i in range(num_tests):
        key = random_bytes(rng.choice((16, 24, 32)))
        iv = random_bytes(16)
        plaintext = random_bytes(rng.randint(0, 64))

        cipher = Cipher(key, mode="cbc", iv=iv)
        ciphertext = cipher.encrypt(plaintext)
        expected = reference_encrypt(key, plaintext, mode="cbc", iv=iv)
        ok = (
            ciphertext == expected
            and cipher.decrypt(ciphertext) == plaintext
            and reference_decrypt(key, ciphertext, mode="cbc", iv=iv) == plaintext
        )
        if not ok:
            random_failed += 1
            if verbose:
                click.echo(f"  Random test {i+1}: FAIL (key {len(key)} bytes, "
                           f"pt {len(plaintext)} bytes)")

    click.echo(f"Random tests: {num_tests - random_failed}/{num_tests} passed")
    failures += random_failed

    click.echo("")
    if failures == 0:
        click.echo("VALIDATION PASSED")
        sys.exit(0)
    else:
        click.echo(f"VALIDATION FAILED: {failures} failures")
        sys.exit(1)


if __name__ == "__main__":
    main()
