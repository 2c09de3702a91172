""" Local representations of remote CInP objects. Any class implementing the
    :class:`Object` interface can be registered against a model address, so
    that objects fetched from that model are decoded into instances of that
    class; everything else is decoded into a :class:`MappedObject`.
"""

import threading


class Object:
    """ The interface expected of every local object. The :attr:`uri` is the
        address of the remote object, or None if it has not been created
        yet. Subclasses override :func:`decode` and :func:`encode` to map
        between their attributes and the field values on the wire.
    """

    def __init__(self, uri=None):
        self.uri = uri


    def decode(self, data):
        """ Populate this object from the decoded response *data*, which is
            normally a dictionary of field values.
        """

        raise NotImplementedError('decode() must be implemented by subclasses')


    def encode(self, fields=None):
        """ Return a dictionary of field values suitable for sending to the
            server. If *fields* is provided only those fields are included.
        """

        raise NotImplementedError('encode() must be implemented by subclasses')


# end of class Object



class MappedObject(Object):
    """ Generic object for any model without a registered type. The field
        values are kept in the :attr:`data` dictionary, in the order the
        server provided them; item access is passed through to it.
    """

    def __init__(self, uri=None, data=None):

        Object.__init__(self, uri)

        if data is None:
            data = dict()

        self.data = dict(data)


    def __contains__(self, key):
        return key in self.data


    def __eq__(self, other):

        if isinstance(other, MappedObject):
            return self.uri == other.uri and self.data == other.data

        return NotImplemented


    def __getitem__(self, key):
        return self.data[key]


    def __iter__(self):
        return iter(self.data)


    def __len__(self):
        return len(self.data)


    def __repr__(self):
        return 'MappedObject(%r, %r)' % (self.uri, self.data)


    def __setitem__(self, key, value):
        self.data[key] = value


    def decode(self, data):

        if data is None:
            return

        if isinstance(data, dict):
            pass
        else:
            raise TypeError('expected a JSON object, got ' + type(data).__name__)

        self.data.update(data)


    def encode(self, fields=None):

        if fields is None:
            return dict(self.data)

        subset = dict()
        for field in fields:
            try:
                subset[field] = self.data[field]
            except KeyError:
                pass

        return subset


# end of class MappedObject



class Registry:
    """ Map model addresses to the factory used to create local objects. The
        address used as a key is the model address without any id list,
        for example ``/api/v1/ns/model``.
    """

    def __init__(self):

        self._factories = dict()
        self._lock = threading.Lock()


    def __contains__(self, uri):
        return _prefix(uri) in self._factories


    def register(self, uri, factory):
        """ Use *factory*, normally a subclass of :class:`Object`, to create
            the local representation of objects under the model *uri*. The
            factory is invoked once with no arguments as a sanity check; a
            :class:`TypeError` is raised if it does not return an
            :class:`Object`.
        """

        if callable(factory):
            pass
        else:
            raise TypeError('the factory must be callable')

        sample = factory()

        if isinstance(sample, Object):
            pass
        else:
            raise TypeError('%r does not produce Object instances' % (factory))

        self._lock.acquire()
        self._factories[_prefix(uri)] = factory
        self._lock.release()


    def unregister(self, uri):

        self._lock.acquire()
        self._factories.pop(_prefix(uri), None)
        self._lock.release()


    def factory(self, uri):
        """ Return the factory registered for *uri*, defaulting to
            :class:`MappedObject`.
        """

        try:
            return self._factories[_prefix(uri)]
        except KeyError:
            return MappedObject


    def new(self, uri=None):
        """ Return a new, empty local object for the address *uri*. """

        if uri is None:
            return MappedObject()

        instance = self.factory(uri)()
        instance.uri = uri
        return instance


# end of class Registry



def _prefix(uri):
    """ Strip the id list and anything after it from *uri*. """

    offset = uri.find(':')

    if offset != -1:
        uri = uri[:offset]

    return uri


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
