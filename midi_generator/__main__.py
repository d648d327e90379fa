"""Entry point wrapper for ``python -m midi_generator``.

Execution is forwarded to :func:`midi_generator.main` so running the module
and the installed ``midi-generator`` console script behave identically.

Example
-------
::

    python -m midi_generator scale D dorian
"""

from . import main

if __name__ == "__main__":
    main()
