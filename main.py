#!/usr/bin/env python3
"""
Watchlist command line tool
Features:
1. List saved movies and TV shows with filters and sorting
2. Add, remove and toggle items
3. Clear the whole watchlist
"""
import datetime

import click
from colorama import Fore, Style, init
from tabulate import tabulate

from config import Config, setup_logging
from watchlist_manager import ItemKind, JSONFileBackend, SortOrder, create_watchlist

# Initialize colorama
init()

KIND_CHOICES = [kind.value for kind in ItemKind]
SORT_CHOICES = [order.value for order in SortOrder]


@click.group()
@click.option('--storage-file', type=click.Path(dir_okay=False), help='Storage file (defaults to WATCHLIST_STORAGE_FILE)')
@click.option('--verbose', '-v', is_flag=True, help='Show log output')
@click.pass_context
def cli(ctx, storage_file, verbose):
    """Watchlist manager"""
    ctx.ensure_object(dict)

    if verbose:
        setup_logging(level='DEBUG', log_file='')

    backend = JSONFileBackend(storage_file or Config.WATCHLIST_STORAGE_FILE)
    watchlist = create_watchlist(backend, background_writes=False)
    ctx.obj['watchlist'] = watchlist
    ctx.call_on_close(watchlist.close)


def _descriptor(item_id, title, name, poster):
    descriptor = {'id': item_id, 'title': title, 'name': name}
    if poster:
        descriptor['poster_path'] = poster
    return descriptor


def _format_time(added_at: int) -> str:
    return datetime.datetime.fromtimestamp(added_at / 1000).strftime('%Y-%m-%d %H:%M:%S')


@cli.command('list')
@click.option('--kind', '-k', type=click.Choice(['all'] + KIND_CHOICES), default='all', help='Filter by type')
@click.option('--sort', '-s', 'order', type=click.Choice(SORT_CHOICES), default=SortOrder.NEWEST_FIRST.value, help='Sort order')
@click.pass_context
def list_items(ctx, kind, order):
    """Show the watchlist"""
    watchlist = ctx.obj['watchlist']
    items = watchlist.view(kind, order)

    if not items:
        print(f"{Fore.YELLOW}Watchlist is empty{Style.RESET_ALL}")
        return

    rows = [
        [item.id, item.kind.value, item.label, item.thumbnail or '-', _format_time(item.added_at)]
        for item in items
    ]
    print(tabulate(rows, headers=['ID', 'Type', 'Title', 'Poster', 'Added'], tablefmt='grid'))
    print(f"\n{len(items)} {'item' if len(items) == 1 else 'items'}")


@cli.command()
@click.argument('item_id')
@click.option('--kind', '-k', type=click.Choice(KIND_CHOICES), required=True, help='movie or tv')
@click.option('--title', '-t', help='Title')
@click.option('--name', '-n', help='Fallback name (TV shows)')
@click.option('--poster', '-p', help='Poster path or URL')
@click.pass_context
def add(ctx, item_id, kind, title, name, poster):
    """Add an item to the watchlist"""
    watchlist = ctx.obj['watchlist']

    if watchlist.contains(item_id):
        print(f"{Fore.YELLOW}{item_id} is already in the watchlist{Style.RESET_ALL}")
        return

    try:
        item = watchlist.add(_descriptor(item_id, title, name, poster), kind)
    except ValueError as exc:
        print(f"{Fore.RED}Cannot add {item_id}: {exc}{Style.RESET_ALL}")
        ctx.exit(1)
    print(f"{Fore.GREEN}Added {item.label} ({item.kind.value}){Style.RESET_ALL}")


@cli.command()
@click.argument('item_id')
@click.pass_context
def remove(ctx, item_id):
    """Remove an item from the watchlist"""
    watchlist = ctx.obj['watchlist']

    if watchlist.remove(item_id):
        print(f"{Fore.GREEN}Removed {item_id}{Style.RESET_ALL}")
    else:
        print(f"{Fore.YELLOW}{item_id} is not in the watchlist{Style.RESET_ALL}")


@cli.command()
@click.argument('item_id')
@click.option('--kind', '-k', type=click.Choice(KIND_CHOICES), required=True, help='movie or tv')
@click.option('--title', '-t', help='Title')
@click.option('--name', '-n', help='Fallback name (TV shows)')
@click.option('--poster', '-p', help='Poster path or URL')
@click.pass_context
def toggle(ctx, item_id, kind, title, name, poster):
    """Add the item if missing, remove it otherwise"""
    watchlist = ctx.obj['watchlist']

    try:
        in_watchlist = watchlist.toggle(_descriptor(item_id, title, name, poster), kind)
    except ValueError as exc:
        print(f"{Fore.RED}Cannot add {item_id}: {exc}{Style.RESET_ALL}")
        ctx.exit(1)

    if in_watchlist:
        print(f"{Fore.GREEN}Added {item_id}{Style.RESET_ALL}")
    else:
        print(f"{Fore.GREEN}Removed {item_id}{Style.RESET_ALL}")


@cli.command()
@click.argument('item_id')
@click.pass_context
def contains(ctx, item_id):
    """Check whether an item is saved"""
    if ctx.obj['watchlist'].contains(item_id):
        print(f"{Fore.GREEN}{item_id} is in the watchlist{Style.RESET_ALL}")
    else:
        print(f"{item_id} is not in the watchlist")


@cli.command()
@click.pass_context
def count(ctx):
    """Show how many items are saved"""
    print(ctx.obj['watchlist'].count())


@cli.command()
@click.option('--confirm', '-y', is_flag=True, help='Skip the confirmation prompt')
@click.pass_context
def clear(ctx, confirm):
    """Clear the whole watchlist"""
    watchlist = ctx.obj['watchlist']

    if not confirm:
        confirm_input = input(f"{Fore.YELLOW}Clear all {watchlist.count()} items? (y/N): {Style.RESET_ALL}")
        if confirm_input.lower() != 'y':
            print("Cancelled")
            return

    watchlist.clear_all()
    print(f"{Fore.GREEN}Watchlist cleared{Style.RESET_ALL}")


if __name__ == '__main__':
    cli()
