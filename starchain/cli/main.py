# starchain/cli/main.py
"""
CLI for signing ownership challenges and inspecting exported star chains.
"""

import json
import os
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from starchain.chain.blockchain import Blockchain, read_jsonl
from starchain.config import ChainSettings
from starchain.core.errors import MalformedChallenge, RegistrationRejected
from starchain.core.types import Block
from starchain.crypto.keys import IdentityKeyPair
from starchain.registry.challenge import issue_challenge
from starchain.verify.validator import ChainValidator

app = typer.Typer(
    name="starchain",
    help="Sign ownership challenges and inspect tamper-evident star chains",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def get_chain_path(chain_flag: Optional[Path] = None) -> Path:
    """Resolve the chain export path in this order:
    1. FILE argument / --output flag
    2. STARCHAIN_EXPORT_PATH environment variable
    3. Default: ./starchain.jsonl
    """
    if chain_flag:
        return chain_flag.resolve()
    env_path = os.environ.get("STARCHAIN_EXPORT_PATH")
    if env_path:
        return Path(env_path).resolve()
    return Path.cwd() / "starchain.jsonl"


def load_chain_or_exit(path: Path) -> List[Block]:
    if not path.exists():
        console.print(f"[red]Chain export not found: {path}[/]")
        console.print(f"[yellow]Create one with: starchain demo --output {path}[/]")
        raise typer.Exit(1)
    try:
        return read_jsonl(path)
    except (ValueError, KeyError) as e:
        console.print(f"[red]Failed to read chain export: {str(e)}[/]")
        console.print("[yellow]The file may be corrupted or not a starchain JSONL export.[/]")
        raise typer.Exit(1)


def describe_block(block: Block) -> str:
    try:
        payload = block.decode()
    except ValueError:
        return "<undecodable body>"
    data = payload.get("data") if isinstance(payload, dict) else payload
    if isinstance(data, dict):
        return f"{data.get('owner', '?')[:16]}… {json.dumps(data.get('star'))[:60]}"
    return str(data)


def print_blocks(chain: List[Block]) -> None:
    table = Table(title="Star Chain")
    table.add_column("Height", justify="right")
    table.add_column("Time")
    table.add_column("Hash")
    table.add_column("Previous")
    table.add_column("Payload")

    for block in chain:
        table.add_row(
            str(block.height),
            str(block.time),
            (block.hash or "—")[:16],
            (block.previous_block_hash or "—")[:16],
            describe_block(block),
        )

    console.print(table)


@app.command()
def keygen(
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write the private key (base64url) here"),
):
    """Generate an Ed25519 identity."""
    keys = IdentityKeyPair.generate()
    console.print(f"[bold]Identity:[/] {keys.identity}")
    if out:
        out.write_text(keys.private_key_b64url() + "\n", encoding="utf-8")
        console.print(f"[green]Private key written to {out}[/]")
    else:
        console.print(f"[bold]Private key:[/] {keys.private_key_b64url()}")


@app.command()
def challenge(
    identity: str = typer.Argument(..., help="Identity (base64url public key) to bind"),
):
    """Issue an ownership challenge for IDENTITY."""
    tag = ChainSettings.from_env().registry_tag
    try:
        console.print(issue_challenge(identity, tag=tag), soft_wrap=True)
    except MalformedChallenge as e:
        console.print(f"[red]{str(e)}[/]")
        raise typer.Exit(1)


@app.command()
def sign(
    message: str = typer.Argument(..., help="Challenge string to sign"),
    key: Path = typer.Option(..., "--key", "-k", help="File holding the private key (base64url)"),
):
    """Sign a challenge with a private key file."""
    if not key.exists():
        console.print(f"[red]Key file not found: {key}[/]")
        raise typer.Exit(1)
    try:
        keys = IdentityKeyPair.from_private_b64url(key.read_text(encoding="utf-8"))
    except ValueError as e:
        console.print(f"[red]Invalid private key: {str(e)}[/]")
        raise typer.Exit(1)
    console.print(keys.sign(message), soft_wrap=True)


@app.command()
def demo(
    stars: int = typer.Option(3, "--stars", "-n", help="Number of stars to register"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Export the chain as JSONL"),
):
    """Build an in-memory chain, register some stars and validate it."""
    chain = Blockchain(settings=ChainSettings.from_env())
    owners = [IdentityKeyPair.generate() for _ in range(2)]

    for i in range(stars):
        owner = owners[i % len(owners)]
        message = chain.issue_challenge(owner.identity)
        star = {"dec": f"68° 52' {i:02d}.0", "ra": f"16h 29m {i:02d}.0s", "story": f"Demo star #{i}"}
        try:
            chain.submit_star(owner.identity, message, owner.sign(message), star)
        except RegistrationRejected as e:
            console.print(f"[red]Star #{i} rejected: {str(e)}[/]")
            raise typer.Exit(1)

    print_blocks(chain.get_chain())
    console.print(str(chain.validate_chain()))

    if output:
        out_path = get_chain_path(output)
        count = chain.export_jsonl(out_path)
        console.print(f"[green]Exported {count} blocks to {out_path}[/]")


@app.command()
def blocks(
    file: Optional[Path] = typer.Argument(None, help="Chain export (JSONL)"),
):
    """List the blocks of an exported chain."""
    chain = load_chain_or_exit(get_chain_path(file))
    if not chain:
        console.print("[yellow]Chain export is empty.[/]")
        return
    print_blocks(chain)


@app.command()
def verify(
    file: Optional[Path] = typer.Argument(None, help="Chain export (JSONL)"),
):
    """Validate hashes and links of an exported chain."""
    path = get_chain_path(file)
    chain = load_chain_or_exit(path)

    result = ChainValidator().validate(chain)
    if result.is_valid:
        console.print(f"[green]✓ Chain '{path.name}' is valid ({len(chain)} blocks)[/]")
    else:
        console.print(f"[red]✗ Validation failed for '{path.name}'[/]")
        for v in result:
            console.print(f"  • [{v.index}] {v.kind}: {v.message}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
