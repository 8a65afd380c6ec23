# Routes of the development project service
