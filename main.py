#!/usr/bin/env python3
import argparse
import queue
import sys

import config
from engine import configure, load_engine, unique_append
from logger import logger, set_verbose
from pipeline.aggregator import OutputParams, ResultAggregator
from pipeline.shutdown import OneShot, ShutdownCoordinator
from ratelimit import freq_to_duration
from wordlists import get_file, get_wordlist

BANNER = """
    +=======================================================+
    |                       subcast                         |
    |            Subdomain Enumeration Front End            |
    |                                                       |
    |  Streams names as the engine finds them, prints a     |
    |  source / ASN summary with -v and saves with -o.      |
    +=======================================================+
"""


def build_parser():
    parser = argparse.ArgumentParser(
        prog='subcast',
        description=BANNER,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        usage="%(prog)s [options] domain domain2 domain3... (e.g. example.com)",
        epilog="""
Examples:
  subcast example.com
  subcast -domains targets.txt -o results.txt
  subcast example.com -brute -w names.txt -freq 600
  subcast example.com -ip -vv
  subcast example.com -whois -l

Or just send a file in the options with -domains
        """
    )

    parser.add_argument('domains', nargs='*', metavar='domain', help="Target domains")
    parser.add_argument('-domains', '--domains-file', type=str, metavar='FILE', help="Path to the domains file")
    parser.add_argument('-ip', '--ip', action='store_true', help="Show the IP addresses for discovered names")
    parser.add_argument('-brute', '--brute', action='store_true', help="Execute brute forcing after searches")
    parser.add_argument('-norecursive', '--norecursive', action='store_true', help="Turn off recursive brute forcing")
    parser.add_argument('-v', '--verbose', action='store_true', help="Print the summary information")
    parser.add_argument('-vv', '--extra-verbose', action='store_true', help="Print the data source information")
    parser.add_argument('-whois', '--whois', action='store_true', help="Include domains discovered with reverse whois")
    parser.add_argument('-l', '--list', action='store_true', help="List all domains to be used in an enumeration")
    parser.add_argument('-freq', '--freq', type=int, default=0, metavar='N', help="Sets the number of max DNS queries per minute")
    parser.add_argument('-w', '--wordlist', type=str, default='', metavar='FILE', help="Path to a different wordlist file")
    parser.add_argument('-o', '--output', type=str, default='', metavar='FILE', help="Path to the output file")

    return parser


def run_enumeration(engine, domains, wordlist, brute=False, recursive=True, freq=0,
                    verbose=False, sources=False, print_ips=False, file_out='',
                    install_signals=True, stream=None):
    """
    Run the engine while streaming its results, then flush the output.

    Returns:
        The ResultAggregator, frozen after the final flush
    """
    finish = OneShot('finish')
    done = OneShot('done')
    results = queue.Queue(maxsize=config.RESULTS_QUEUE_SIZE)

    aggregator = ResultAggregator(OutputParams(
        results=results,
        finish=finish,
        done=done,
        verbose=verbose,
        sources=sources,
        print_ips=print_ips,
        file_out=file_out,
        stream=stream,
    ))
    aggregator.start()

    coordinator = ShutdownCoordinator(finish, done)
    if install_signals:
        coordinator.install()

    engine_config = configure(
        engine,
        domains=domains,
        wordlist=wordlist,
        brute_forcing=brute,
        recursive=recursive,
        output=results,
    )
    engine_config.frequency = freq_to_duration(freq, engine_config.frequency)
    logger.debug("Query delay: %s", engine_config.frequency)

    try:
        engine.run(engine_config)
    except Exception as e:
        logger.error("Enumeration engine failed: %s", e)
    finally:
        coordinator.engine_finished()
        if install_signals:
            coordinator.uninstall()

    return aggregator


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    verbose = args.verbose or args.extra_verbose
    if args.extra_verbose:
        set_verbose(True)
        logger.debug("Verbose mode enabled")

    domains = list(args.domains)
    if args.domains_file:
        domains.extend(get_file(args.domains_file))

    if not domains:
        parser.print_help()
        return 0

    try:
        engine = load_engine(config.ENGINE)
    except ValueError as e:
        logger.error("%s", e)
        return 1

    if args.whois:
        domains = unique_append(domains, *engine.reverse_whois(domains[0]))

    if args.list:
        # Just show the domains and quit
        for domain in domains:
            print(domain)
        return 0

    wordlist = get_wordlist(args.wordlist) if args.brute else []

    run_enumeration(
        engine,
        domains,
        wordlist,
        brute=args.brute,
        recursive=not args.norecursive,
        freq=args.freq,
        verbose=verbose,
        sources=args.extra_verbose,
        print_ips=args.ip,
        file_out=args.output,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
