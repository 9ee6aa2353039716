import logging
logger = logging.getLogger('hellofixture')
request_logger = logging.getLogger('hellofixture.requests')

from collections import deque
from datetime import datetime

from zope.interface import implementer
from twisted.internet import protocol
from twisted.internet.interfaces import IHalfCloseableProtocol
from twisted.protocols import basic

DEFAULT_PORT = 8080
DEFAULT_INTERFACE = "0.0.0.0"


def format_timestamp(moment=None):
    '''
    Local wall-clock time in the same layout as Ruby's Time#to_s.

    >>> from datetime import timezone, timedelta
    >>> format_timestamp(datetime(2018, 11, 19, 9, 5, 3, tzinfo=timezone(timedelta(hours=1))))
    '2018-11-19 09:05:03 +0100'
    '''
    if moment is None:
        moment = datetime.now().astimezone()
    return moment.strftime("%Y-%m-%d %H:%M:%S %z")


def build_response(timestamp):
    '''
    >>> build_response('2018-11-19 09:05:03 +0100')
    b'HTTP/1.1 200\\r\\nContent-Type: text/html\\r\\n\\r\\nHello world! The time is 2018-11-19 09:05:03 +0100'
    '''
    return b"".join([
        b"HTTP/1.1 200\r\n",
        b"Content-Type: text/html\r\n",
        b"\r\n",
        "Hello world! The time is {}".format(timestamp).encode('utf-8'),
    ])


@implementer(IHalfCloseableProtocol)
class FixtureProtocol(basic.LineReceiver):

    # the first line ends at a bare newline; a preceding \r stays in the line
    delimiter = b"\n"

    responded = False

    def connectionMade(self):
        logger.debug("Connection from %s", self.transport.getPeer())
        self.factory.connectionStarted(self)

    def lineReceived(self, line):
        if self.responded:
            return
        self.responded = True

        request_logger.info("%s", line.rstrip(b"\r").decode('utf-8', 'replace'))
        self.transport.write(build_response(self.factory.timestamp()))
        self.transport.loseConnection()

    def lineLengthExceeded(self, line):
        self.lineReceived(line[:self.MAX_LENGTH])

    def readConnectionLost(self):
        # client closed its side before sending a newline: answer whatever
        # was received, like a read that hits end-of-stream
        self.lineReceived(self.clearLineBuffer())

    def writeConnectionLost(self):
        self.transport.loseConnection()

    def connectionLost(self, reason):
        if not self.responded:
            logger.debug("Connection from %s dropped before a response: %s",
                         self.transport.getPeer(), reason.getErrorMessage())
        self.factory.connectionFinished(self)


class FixtureFactory(protocol.ServerFactory):
    '''
    Services one connection at a time. Connections accepted while another
    one is active stay paused, in arrival order, until it has been closed.
    '''
    protocol = FixtureProtocol

    def __init__(self, now=None):
        self.now = now
        self.active = None
        self.waiting = deque()

    def timestamp(self):
        if self.now is None:
            return format_timestamp()
        return format_timestamp(self.now())

    def connectionStarted(self, proto):
        if self.active is None:
            self.active = proto
        else:
            logger.debug("Busy; queueing connection (%d waiting)", len(self.waiting) + 1)
            proto.pauseProducing()
            self.waiting.append(proto)

    def connectionFinished(self, proto):
        if proto is not self.active:
            if proto in self.waiting:
                self.waiting.remove(proto)
            return
        self.active = None
        if self.waiting:
            self.active = self.waiting.popleft()
            self.active.resumeProducing()
