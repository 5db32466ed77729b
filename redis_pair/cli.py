import sys

import click

from .admin import Action
from .command import run_action_command, EXIT_FAILURE
from .config import Cluster
from .options import verbose_option, debug_option, env_file_option


@click.command()
@click.argument('cluster', type=click.Choice([c.value for c in Cluster], case_sensitive=False))
@click.argument('action', type=click.Choice([a.value for a in Action], case_sensitive=False))
@click.option('-y', '--yes', 'yes', is_flag=True, help='Do not ask before flushing.')
@env_file_option()
@debug_option()
@verbose_option()
def cli(cluster, action, yes, env_file, debug):
    '''Run ACTION against the nodes of the source or target cluster.

    ACTION is one of bgsave, dups, flush, keys, memory, primaries or replicas.
    '''
    return run_action_command(Cluster(cluster.lower()), Action(action.lower()),
                              env_file, yes=yes, debug=debug)


def main(args=None):
    try:
        rv = cli.main(args=args, prog_name='py-redis-pair', standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(EXIT_FAILURE)
    except click.Abort:
        click.echo('Aborted!', err=True)
        sys.exit(EXIT_FAILURE)
    sys.exit(rv or 0)
