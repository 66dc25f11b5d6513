"""HTTP URL model — parameters, percent-encoding, ``Url`` and ``URLBuilder``."""
