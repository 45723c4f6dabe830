# speclab/transforms/__init__.py
from .spectral import ToAmph, ToRlim, amph2rlim, dep_stats, rlim2amph


class TComposite:
    """
    Последовательная композиция трансформаций.

    Применяет все трансформы из списка по порядку:
        records = tf(records)
    """
    def __init__(self, tfs):
        self.tfs = list(tfs)

    def __call__(self, records):
        for tf in self.tfs:
            records = tf(records)
        return records


__all__ = ["TComposite", "ToAmph", "ToRlim", "rlim2amph", "amph2rlim", "dep_stats"]
