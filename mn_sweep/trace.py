"Notification sources with any number of subscribers"


class TracedCallback(object):
    """Calls every connected function, in connection order, with the
       arguments the source was fired with.
       name: used only in log messages"""

    def __init__(self, name=''):
        self.name = name
        self.listeners = {}
        self.next_id = 0

    def connect(self, listener):
        """Add a listener
           returns: id to be used with disconnect()"""
        listener_id = self.next_id
        self.listeners[listener_id] = listener
        self.next_id += 1
        return listener_id

    def disconnect(self, listener):
        """Remove a listener given its id or the function itself
           returns: True if it was connected"""
        if listener in self.listeners:
            del self.listeners[listener]
            return True
        for listener_id, fn in list(self.listeners.items()):
            if fn == listener:
                del self.listeners[listener_id]
                return True
        return False

    def __call__(self, *args):
        for listener in list(self.listeners.values()):
            listener(*args)

    def __len__(self):
        return len(self.listeners)

    def __repr__(self):
        return '<TracedCallback %s: %d listener(s)>' % (self.name, len(self))
