""" Process-wide defaults for the CInP client. Each default can be set by
    calling the relevant function with an explicit value, or by setting an
    environment variable prior to the first invocation of that function;
    otherwise the built-in default applies. Once determined, a value is
    cached for the life of the process.
"""

import os


def _lookup(function, value, variable, default, cast):

    if value is not None:
        value = cast(value)
        if value <= 0:
            raise ValueError('%s must be greater than zero, got %r' % (variable, value))

        function.found = value
        return value

    found = function.found

    if found is not None:
        return found

    try:
        found = os.environ[variable]
    except KeyError:
        found = default
    else:
        try:
            found = cast(found)
        except ValueError:
            raise ValueError('%s is not a valid number: %r' % (variable, found))

        if found <= 0:
            raise ValueError('%s must be greater than zero, got %r' % (variable, found))

    function.found = found
    return found



def timeout(default=None):
    """ Return the number of seconds a single request is allowed to take
        before it fails with :class:`cinp.errors.TransportTimeout`. This
        defaults to 30 seconds, and can be overridden by calling this method
        with a new value, or by setting the ``CINP_TIMEOUT`` environment
        variable.
    """

    return _lookup(timeout, default, 'CINP_TIMEOUT', 30.0, float)

timeout.found = None



def chunk_size(default=None):
    """ Return the page size used when streaming list results. This defaults
        to 50, and can be overridden by calling this method with a new
        value, or by setting the ``CINP_CHUNK_SIZE`` environment variable.
    """

    return _lookup(chunk_size, default, 'CINP_CHUNK_SIZE', 50, int)

chunk_size.found = None



def user_agent(default=None):
    """ Return the User-Agent header sent with every request, by default
        ``python CInP client``; the ``CINP_USER_AGENT`` environment variable
        takes precedence over the default.
    """

    if default is not None:
        user_agent.found = str(default)

    found = user_agent.found

    if found is not None:
        return found

    try:
        found = os.environ['CINP_USER_AGENT']
    except KeyError:
        found = 'python CInP client'

    user_agent.found = found
    return found

user_agent.found = None



def reset():
    """ Forget any cached values, forcing the next invocation of each
        function to consult the environment again.
    """

    timeout.found = None
    chunk_size.found = None
    user_agent.found = None


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
