"""
srpauth Interactive CLI
"""

import click
import sys
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from prompt_toolkit import prompt as pt_prompt
from prompt_toolkit.validation import Validator, ValidationError

from . import __version__
from .core.errors import CryptoSetupError, ProtocolFormatError, TransportError
from .core.groups import GROUP_TABLE
from .core.protocol import DEFAULT_PORT, DEFAULT_TIMEOUT, LengthEncoding

console = Console()


class NotEmptyValidator(Validator):
    def __init__(self, field):
        self.field = field

    def validate(self, document):
        if not document.text:
            raise ValidationError(message=f"{self.field} required")


def show_banner():
    panel = Panel(
        "[cyan]Secure Remote Password client[/cyan]\n"
        "[dim]SRP-6a • PBKDF2-HMAC-SHA512 • SHA-512 proofs[/dim]",
        title=f"[bold cyan]srpauth v{__version__}[/bold cyan]",
        border_style="cyan",
    )
    console.print(panel)


@click.group(invoke_without_command=True)
@click.pass_context
@click.option('--version', is_flag=True, help='Show version')
def main(ctx, version):
    """srpauth - SRP password authentication client"""
    if version:
        console.print(f"srpauth v{__version__}")
        return

    if ctx.invoked_subcommand is None:
        show_banner()
        console.print(ctx.get_help())


@main.command()
@click.option('--host', required=True, help='Server host')
@click.option('--port', default=DEFAULT_PORT, show_default=True, help='Server port')
@click.option('--username', help='Account username')
@click.option('--timeout', default=DEFAULT_TIMEOUT, show_default=True, help='Socket timeout in seconds')
@click.option('--seven-bit', is_flag=True, help='Use 7-bit varint length prefixes')
@click.option('-v', '--verbose', is_flag=True, help='Verbose output')
def login(host, port, username, timeout, seven_bit, verbose):
    """Authenticate against an SRP server"""
    show_banner()

    try:
        if not username:
            username = pt_prompt("Username: ", validator=NotEmptyValidator("Username")).strip()
        password = pt_prompt("Password: ", is_password=True, validator=NotEmptyValidator("Password"))
    except (KeyboardInterrupt, EOFError):
        console.print("\n[yellow]Cancelled[/yellow]")
        return

    from .client_module import SrpClient

    client = SrpClient(username, password, verbose=verbose, console=console)
    encoding = LengthEncoding.SEVEN_BIT if seven_bit else LengthEncoding.FIXED

    try:
        success = client.authenticate(host, port, timeout=timeout, length_encoding=encoding)
    except TransportError as e:
        console.print(f"[red]✗ Connection error: {e}[/red]")
        sys.exit(1)
    except ProtocolFormatError as e:
        console.print(f"[red]✗ Malformed server data: {e}[/red]")
        sys.exit(1)
    except CryptoSetupError as e:
        console.print(f"[red]✗ Cryptographic setup failed: {e}[/red]")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled[/yellow]")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]✗ Error: {e}[/red]")
        if verbose:
            console.print_exception()
        sys.exit(1)

    if success:
        console.print("[green]✓ Authenticated[/green]")
        sys.exit(0)

    console.print("[red]✗ Authentication failed[/red]")
    sys.exit(1)


@main.command()
def groups():
    """Show supported SRP groups"""
    table = Table(title="SRP Groups (RFC 5054)")
    table.add_column("Strength", style="cyan")
    table.add_column("Wire id", style="white")
    table.add_column("Generator", style="white")
    table.add_column("Digest", style="white")

    for strength, (N, g, digest) in GROUP_TABLE.items():
        table.add_row(strength.name, str(int(strength)), str(g), digest.name)

    console.print(table)


if __name__ == "__main__":
    main()
