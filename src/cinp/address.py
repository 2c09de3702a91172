""" Parsing and construction of CInP addresses. An address is a single path
    string naming a namespace, a model within that namespace, an optional
    list of object ids, and an optional action::

        /api/v1/ns/ns2/model:id1:id2:(action)

    Everything is relative to a fixed root path (``/api/v1/`` above); the
    :class:`URI` class is bound to one root path and does all the work.
"""

import re

from .errors import MalformedAddress


# Characters permitted in namespace, model, id, and action names. An id is
# additionally allowed to be the empty string.

_chars = r"[a-zA-Z0-9\-_.!~*']"


class Address:
    """ An immutable representation of a parsed CInP address. The *ids* are
        None if the address carries no id list at all, which is distinct from
        a list containing a single empty id (``model::``). The :attr:`multi`
        flag is derived from the id list and is never stored separately.

        Converting an :class:`Address` to a string serializes it according to
        the same rules as :func:`URI.build`.
    """

    __slots__ = ('root_path', 'namespace', 'model', 'action', 'ids')

    def __init__(self, root_path, namespace=(), model='', action='', ids=None):

        if ids is not None:
            ids = tuple(ids)

        object.__setattr__(self, 'root_path', root_path)
        object.__setattr__(self, 'namespace', tuple(namespace or ()))
        object.__setattr__(self, 'model', model or '')
        object.__setattr__(self, 'action', action or '')
        object.__setattr__(self, 'ids', ids)


    def __setattr__(self, name, value):
        raise AttributeError('Address instances are immutable')


    def __delattr__(self, name):
        raise AttributeError('Address instances are immutable')


    def __eq__(self, other):

        if isinstance(other, Address):
            pass
        else:
            return NotImplemented

        return self._key() == other._key()


    def __hash__(self):
        return hash(self._key())


    def __repr__(self):
        return 'Address(' + repr(str(self)) + ')'


    def __str__(self):
        return _build(self.root_path, self.namespace, self.model, self.action, self.ids)


    def _key(self):
        return (self.root_path, self.namespace, self.model, self.action, self.ids)


    @property
    def multi(self):
        """ True if the address refers to two or more objects. """

        if self.ids is None:
            return False

        return len(self.ids) > 1


    def replace(self, **kwargs):
        """ Return a new :class:`Address` with the named components replaced,
            for example ``address.replace(ids=['1', '2'])``.
        """

        components = dict()
        components['namespace'] = self.namespace
        components['model'] = self.model
        components['action'] = self.action
        components['ids'] = self.ids
        components.update(kwargs)

        return Address(self.root_path, **components)


# end of class Address



class URI:
    """ Parse and construct addresses relative to a fixed *root_path*. The
        root path must begin and end with a forward slash; a
        :class:`ValueError` is raised otherwise.
    """

    def __init__(self, root_path):

        if root_path == '' or root_path[0] != '/' or root_path[-1] != '/':
            raise ValueError("root path must start and end with '/'")

        self.root_path = root_path

        # Groups: namespace, model, id list clause, action.

        pattern = '^' + re.escape(root_path)
        pattern += '((?:' + _chars + '+/)*)'
        pattern += '(' + _chars + '+)?'
        pattern += '(:(?:' + _chars + '*:)*)?'
        pattern += r'(\(' + _chars + r'+\))?$'

        self.regex = re.compile(pattern)


    def __repr__(self):
        return 'URI(' + repr(self.root_path) + ')'


    def _match(self, uri):

        if uri.startswith(self.root_path):
            pass
        else:
            raise MalformedAddress(uri, "does not start with '%s'" % (self.root_path))

        match = self.regex.match(uri)

        if match is None:
            raise MalformedAddress(uri)

        return match


    def parse(self, uri):
        """ Parse the *uri* string and return an :class:`Address` instance.
            :class:`cinp.errors.MalformedAddress` is raised if the *uri* does
            not match the grammar or does not start with the root path.
        """

        namespace, model, action, ids = _components(self._match(uri))

        # The grammar itself permits an id list or action directly after a
        # namespace; neither means anything without a model.

        if model == '' and (ids is not None or action != ''):
            raise MalformedAddress(uri, 'id list or action without a model')

        return Address(self.root_path, namespace, model, action, ids)


    def split(self, uri):
        """ Split the *uri* into its parts. The return value is a tuple of
            (namespace, model, action, ids, multi), where *namespace* is a
            list of namespace segments (possibly empty), *model* and
            *action* are strings (empty if not present), *ids* is None if
            there is no id list, otherwise a list of id strings, and *multi*
            is True if two or more ids are present.
        """

        address = self.parse(uri)

        if address.ids is None:
            ids = None
        else:
            ids = list(address.ids)

        return (list(address.namespace), address.model, address.action, ids, address.multi)


    def build(self, namespace=None, model='', action='', ids=None):
        """ Construct an address string from the components. If the *model*
            is empty only the namespace is serialized, the *action* and *ids*
            are ignored. An empty *ids* sequence is treated the same as None:
            no id list is emitted at all.
        """

        return _build(self.root_path, namespace, model, action, ids)


    def extract_ids(self, uri_list):
        """ Return a single flat list of every id found in the sequence of
            addresses in *uri_list*, preserving the order of the addresses and
            the order of the ids within each address. Addresses without an id
            list contribute nothing. The first malformed address raises
            :class:`cinp.errors.MalformedAddress`.
        """

        result = list()

        for uri in uri_list:
            ids = self.parse(uri).ids

            if ids is not None:
                result.extend(ids)

        return result


    def update_ids(self, uri, ids):
        """ Return *uri* with its id list replaced by *ids*, preserving the
            namespace, model, and action.
        """

        address = self.parse(uri)
        return _build(self.root_path, address.namespace, address.model, address.action, ids)


# end of class URI



def _build(root_path, namespace, model, action, ids):

    result = root_path

    if namespace:
        result += '/'.join(namespace) + '/'

    if not model:
        return result

    result += model

    if ids:
        result += ':' + ':'.join(ids) + ':'

    if action:
        result += '(' + action + ')'

    return result



def _components(match):

    namespace, model, clause, action = match.groups()

    if namespace:
        namespace = namespace.strip('/').split('/')
    else:
        namespace = list()

    if model is None:
        model = ''

    if action is None:
        action = ''
    else:
        action = action[1:-1]

    return namespace, model, action, _ids(clause)



def _ids(clause):
    """ Interpret the id list clause of an address. A clause of ``::`` is a
        single empty id; a lone colon carries no ids and is treated the same
        as having no clause at all.
    """

    if clause is None or clause == ':':
        return None

    return clause[1:-1].split(':')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
