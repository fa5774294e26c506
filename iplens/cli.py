import ipaddress
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from click.core import ParameterSource

from . import __version__
from .config import (
    DEFAULT_DATABASE_DIR, DEFAULT_DNS_TIMEOUT, DEFAULT_LANGUAGE,
    ENV_DATABASE_DIR, ENV_DNS_TIMEOUT, ENV_LANGUAGE, Settings,
)
from .exceptions import DatabaseError
from .logging_setup import setup_logging
from .models import IPAddress, Request, SubdivisionPolicy
from .output import ConsoleOutput, JsonExporter
from .pipeline import list_languages, resolve


logger = logging.getLogger(__name__)


class IPAddressType(click.ParamType):
    """IPv4 or IPv6 address argument"""
    name = "ipaddr"

    def convert(self, value, param, ctx):
        if isinstance(value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
            return value
        try:
            return ipaddress.ip_address(value)
        except ValueError:
            self.fail(f"'{value}' is not a valid IPv4 or IPv6 address", param, ctx)


IP_ADDRESS = IPAddressType()


def check_mode(ctx: click.Context, ipaddr: Optional[IPAddress], last: bool, list_only: bool):
    """Reject mixing a lookup with --ll, or asking for neither"""
    if list_only:
        lang_given = ctx.get_parameter_source('lang') == ParameterSource.COMMANDLINE
        if ipaddr is not None or last or lang_given:
            raise click.UsageError("--ll cannot be used with IPADDR, --lang or --last", ctx)
    elif ipaddr is None:
        raise click.UsageError("Missing argument 'IPADDR'.", ctx)


@click.command()
@click.argument('ipaddr', required=False, type=IP_ADDRESS)
@click.option('-m', '--mmdir', default=DEFAULT_DATABASE_DIR, envvar=ENV_DATABASE_DIR,
              type=click.Path(file_okay=False, path_type=Path), show_default=True,
              help='Directory containing mmdb files')
@click.option('--lang', default=DEFAULT_LANGUAGE, envvar=ENV_LANGUAGE, show_default=True,
              help='IETF language code used to query names')
@click.option('--last', is_flag=True,
              help='For region details read last subdivision rather than first')
@click.option('--ll', 'list_only', is_flag=True,
              help='List IETF language codes applicable for City DB and exit')
@click.option('-w', '--timeout', default=DEFAULT_DNS_TIMEOUT, envvar=ENV_DNS_TIMEOUT,
              type=click.FloatRange(min=0, min_open=True), show_default=True,
              help='Timeout for the reverse DNS lookup in seconds')
@click.option('--dns/--no-dns', default=True,
              help='Enable/disable the hostname lookup (default: enabled)')
@click.option('-v', '--verbose', is_flag=True, help='Log debug details to stderr')
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context, ipaddr: Optional[IPAddress], mmdir: Path, lang: str,
         last: bool, list_only: bool, timeout: float, dns: bool, verbose: bool):
    """
    IPLens - IP address information from local MaxMind databases.

    Print hostname, location and network owner of IPADDR as JSON,
    without any network API. Addresses that are not globally routable
    are reported as bogons.

    Examples:

        iplens 8.8.8.8

        iplens 2a00:1450:400a:801::200e --lang de --last

        iplens --ll -m ~/GeoIP
    """
    setup_logging(logging.DEBUG if verbose else logging.WARNING)
    check_mode(ctx, ipaddr, last, list_only)

    output = ConsoleOutput()
    settings = Settings(database_dir=mmdir, language=lang, dns_timeout=timeout)

    try:
        if list_only:
            click.echo(", ".join(list_languages(settings.database_dir, settings)))
            return

        request = Request(
            address=ipaddr,
            database_dir=settings.database_dir,
            language=settings.language,
            subdivision_policy=SubdivisionPolicy.LAST if last else SubdivisionPolicy.FIRST,
        )
        record = resolve(request, settings=settings, dns=dns)
    except DatabaseError as e:
        logger.debug("Lookup aborted", exc_info=True)
        output.print_error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        output.print_warning("Interrupted")
        sys.exit(130)

    click.echo(JsonExporter().render(record))


if __name__ == '__main__':
    main()
