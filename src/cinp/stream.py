""" Background streaming of list results. A producer runs in a dedicated
    background thread and hands items to the consumer one at a time through
    a :class:`Channel` with no buffer: the producer blocks on every item until
    the consumer takes it, so it can never get further ahead than the page
    it is currently working through.
"""

import logging
import threading

from .cancel import Token
from .errors import Cancelled

logger = logging.getLogger(__name__)


class Channel:
    """ A rendezvous point between exactly one producer and one consumer.
        :func:`send` does not return until the item has been received, the
        channel is closed, or the *cancel* token fires.
    """

    def __init__(self, cancel):

        self.cancel = cancel
        self.condition = threading.Condition()
        self.closed = False
        self.full = False
        self.item = None

        cancel.on_cancel(self._wake)


    def _wake(self):
        self.condition.acquire()
        self.condition.notify_all()
        self.condition.release()


    def _stopped(self):
        return self.closed or self.cancel.cancelled


    def send(self, item):
        """ Offer *item* to the consumer. Returns True once it has been
            received, or False if the channel was closed or cancelled first,
            in which case the item is discarded.
        """

        self.condition.acquire()

        try:
            while self.full and not self._stopped():
                self.condition.wait()

            if self._stopped():
                return False

            self.item = item
            self.full = True
            self.condition.notify_all()

            while self.full and not self._stopped():
                self.condition.wait()

            if self.full:
                # Nobody took it.
                self.item = None
                self.full = False
                return False

            return True

        finally:
            self.condition.release()


    def recv(self):
        """ Block until an item is available. Returns a tuple of (True, item),
            or (False, None) if the channel is closed or cancelled and
            nothing is pending.
        """

        self.condition.acquire()

        try:
            while not self.full and not self._stopped():
                self.condition.wait()

            if self.full and not self.cancel.cancelled:
                item = self.item
                self.item = None
                self.full = False
                self.condition.notify_all()
                return True, item

            return False, None

        finally:
            self.condition.release()


    def close(self):
        """ No further items will be sent. A pending item, if any, can still
            be received.
        """

        self.condition.acquire()
        self.closed = True
        self.condition.notify_all()
        self.condition.release()


# end of class Channel



class _State:
    """ The parts of a :class:`ListStream` shared with the producer thread.
        The thread must not hold a reference to the stream itself, otherwise
        an abandoned stream would never be collected, and never cancelled.
    """

    def __init__(self, cancel):
        self.token = cancel
        self.channel = Channel(cancel)
        self.error = None
        self.closing = False



def _run(producer, state):

    try:
        producer(state.channel.send, state.token)
    except Cancelled as e:
        if state.closing:
            pass
        else:
            state.error = e
    except Exception as e:
        logger.debug('stream ended early: %s', e, exc_info=True)
        state.error = e
    finally:
        state.channel.close()



class ListStream:
    """ Iterate over the items published by *producer*, a callable invoked
        in a background thread as ``producer(send, cancel)``: it calls
        ``send(item)`` for each item, and stops if ``send`` returns False.
        The *cancel* token is passed along to every request it makes.

        If the producer fails, iteration ends as if the results were
        exhausted; the exception is kept in :attr:`error`, and check it to
        tell the two apart. If *strict* is True the exception is instead
        raised to the consumer once the items produced before the failure
        have been consumed.

        Closing the stream, explicitly via :func:`close`, by leaving a
        ``with`` block, or by discarding it, stops the producer.
    """

    def __init__(self, producer, cancel=None, strict=False):

        self.parent = cancel
        self.strict = strict
        self._raised = False

        state = _State(Token(cancel))
        self._state = state

        self.thread = threading.Thread(target=_run, args=(producer, state))
        self.thread.daemon = True
        self.thread.start()


    def __del__(self):
        try:
            self.close()
        except AttributeError:
            # Construction did not complete.
            pass


    def __enter__(self):
        return self


    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


    def __iter__(self):
        return self


    def __next__(self):

        received, item = self._state.channel.recv()

        if received:
            return item

        error = self._state.error

        if self.strict and error is not None and not self._raised:
            self._raised = True
            raise error

        raise StopIteration

    next = __next__


    @property
    def error(self):
        """ The exception that ended the stream early, or None. """

        return self._state.error


    @property
    def running(self):
        return self.thread.is_alive()


    def close(self):
        """ Stop the producer and discard anything it has not yet handed
            over. Safe to call more than once.
        """

        state = self._state
        state.closing = True
        state.token.cancel()

        if self.parent is not None:
            self.parent.remove(state.token.cancel)


    def join(self, timeout=None):
        """ Wait for the producer thread to exit. Returns True if it has. """

        self.thread.join(timeout)
        return not self.thread.is_alive()


# end of class ListStream


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
