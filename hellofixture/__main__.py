import logging
logger = logging.getLogger('hellofixture')

from argparse import ArgumentParser
import os
import sys

from twisted.internet import reactor
from twisted.internet.error import CannotListenError

from .hellofixture import FixtureFactory, request_logger, DEFAULT_INTERFACE, DEFAULT_PORT


parser= ArgumentParser(description="""
Run a minimal HTTP server for integration tests: every connection gets
its first line logged and a static "Hello world!" page with the current
time, one connection at a time.
""")
parser.add_argument("-b", "--bind", type=str, metavar="ADDRESS", default=DEFAULT_INTERFACE)
parser.add_argument("-p", "--port", type=int, metavar="PORT", default=DEFAULT_PORT)
parser.add_argument("--loglevel", type=str, default="info", metavar="LEVEL")
parser.add_argument("--systemd", action='store_true')

args = parser.parse_args()


def start_server(interface, port, reactor):
    listening = reactor.listenTCP(port, FixtureFactory(), interface=interface)
    address = listening.getHost()
    logger.info("Listening on %s:%s", address.host, address.port)
    return listening


def main(args):
    try:
        start_server(args.bind, args.port, reactor)
    except CannotListenError as e:
        logger.error("Cannot listen on %s:%s: %s", args.bind, args.port, e.socketError)
        return 1

    if args.systemd:
        from . import servicemanager
        servicemanager.notify_ready()

    reactor.run()
    logger.info("Shutdown complete")
    return 0


if __name__ == "__main__":
    log_level_name = os.environ.get('LOG_LEVEL', args.loglevel)
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)
    if args.systemd:
        from . import servicemanager
        log_handler = servicemanager.log_handler()
    else:
        log_handler = logging.StreamHandler()
    logger.setLevel(log_level)
    logger.addHandler(log_handler)
    log_handler.setFormatter(logging.Formatter(fmt="%(levelname)s [%(process)d]: %(name)s: %(message)s"))

    # the first line of every request goes to stdout as-is
    request_handler = logging.StreamHandler(sys.stdout)
    request_handler.setFormatter(logging.Formatter(fmt="%(message)s"))
    request_logger.setLevel(logging.INFO)
    request_logger.addHandler(request_handler)
    request_logger.propagate = False

    sys.exit(main(args))
