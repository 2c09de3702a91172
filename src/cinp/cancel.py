""" Cancellation tokens. A :class:`Token` is handed to any blocking client
    call; cancelling it from another thread aborts the call, which then
    raises :class:`cinp.errors.Cancelled`.
"""

import threading

from .errors import Cancelled


class Token:
    """ A thin wrapper around a :class:`threading.Event`. A token may have a
        *parent*, in which case it is also considered cancelled when the
        parent is. Callbacks registered with :func:`on_cancel` are invoked
        once, from the thread that calls :func:`cancel`.
    """

    def __init__(self, parent=None):

        self.parent = parent
        self.event = threading.Event()
        self.callbacks = list()
        self.callbacks_lock = threading.Lock()

        if parent is not None:
            parent.on_cancel(self.cancel)


    def __repr__(self):
        return 'cancel.Token(cancelled=%r)' % (self.cancelled)


    @property
    def cancelled(self):
        return self.event.is_set()


    def cancel(self):
        """ Cancel this token and any child tokens. Calling this more than
            once has no further effect.
        """

        self.callbacks_lock.acquire()

        if self.event.is_set():
            self.callbacks_lock.release()
            return

        self.event.set()
        callbacks = self.callbacks
        self.callbacks = list()
        self.callbacks_lock.release()

        for callback in callbacks:
            callback()


    def check(self):
        """ Raise :class:`cinp.errors.Cancelled` if the token is cancelled. """

        if self.event.is_set():
            raise Cancelled('request cancelled')


    def on_cancel(self, callback):
        """ Register a *callback* to be invoked upon cancellation. If the
            token is already cancelled the callback is invoked immediately.
        """

        self.callbacks_lock.acquire()
        already = self.event.is_set()
        if not already:
            self.callbacks.append(callback)
        self.callbacks_lock.release()

        if already:
            callback()


    def remove(self, callback):
        """ Discard a previously registered *callback*, if it is still
            pending.
        """

        self.callbacks_lock.acquire()
        try:
            self.callbacks.remove(callback)
        except ValueError:
            pass
        self.callbacks_lock.release()


    def wait(self, timeout=None):
        """ Block until the token is cancelled, or the *timeout* expires.
            Returns True if the token was cancelled.
        """

        return self.event.wait(timeout)


# end of class Token


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
