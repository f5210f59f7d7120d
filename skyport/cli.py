"""
SkyPort CLI - Command-line interface for migrating resource packs
"""

import click
import logging
import sys
from pathlib import Path
from skyport.converters import CONVERTERS
from skyport.migrate import migrate


@click.group()
@click.version_option(package_name="skyport")
def cli():
    """
    SkyPort - Convert OptiFine custom skies to FabricSkyboxes.

    Examples:
        skyport convert old_pack.zip new_pack
        skyport convert old_pack new_pack.zip --converter sky
    """
    pass


@cli.command()
@click.argument('input_path')
@click.argument('output_path')
@click.option('--converter', '-c', 'converters', multiple=True,
              type=click.Choice(sorted(CONVERTERS), case_sensitive=False),
              help='Converter to run (repeatable, default: all)')
@click.option('--verbose', '-v', is_flag=True, help='Show detailed conversion info')
def convert(input_path, output_path, converters, verbose):
    """
    Convert a resource pack.

    INPUT_PATH and OUTPUT_PATH may be directories or .zip archives.

    Examples:
        skyport convert old_pack.zip new_pack
        skyport convert old_pack new_pack -c sky -v
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    try:
        if not Path(input_path).exists():
            raise FileNotFoundError(f"Input pack not found: {input_path}")

        if verbose:
            click.echo(f"Converting: {input_path} → {output_path}")

        reports = migrate(input_path, output_path, converters or None)

        failures = 0
        for name, failed in reports.items():
            for identifier, error_type in sorted(failed.items(), key=lambda item: str(item[0])):
                click.secho(f"[{name}] {identifier}: {error_type.value}", fg='yellow', err=True)
                failures += 1

        if failures:
            click.secho(f"✓ Done with {failures} failed resources, output in {output_path}", fg='yellow')
        else:
            click.secho(f"✓ Success! Converted to {output_path}", fg='green')

    except FileNotFoundError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except ValueError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except OSError as e:
        click.secho(f"I/O Error: {e}", fg='red', err=True)
        sys.exit(1)
    except Exception as e:
        click.secho(f"Unexpected error: {e}", fg='red', err=True)
        if verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
