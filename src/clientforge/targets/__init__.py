from clientforge.targets.android import AndroidPreparer
from clientforge.targets.base import TargetPreparer
from clientforge.targets.ios import IosPreparer
from clientforge.targets.react_native import ReactNativePreparer


def default_preparers():
    """Preparers in the order they run: React Native, Android, iOS."""
    return [ReactNativePreparer(), AndroidPreparer(), IosPreparer()]


__all__ = [
    "TargetPreparer",
    "ReactNativePreparer",
    "AndroidPreparer",
    "IosPreparer",
    "default_preparers",
]
