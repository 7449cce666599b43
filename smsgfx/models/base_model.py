#!/usr/bin/env python3
"""
Base model classes with change notification
Observable properties for state objects and observable ordered lists
"""

import secrets
from typing import Any, Callable, Iterator, List, Optional, TypeVar

from PyQt6.QtCore import QObject, pyqtSignal

from ..constants import PROJECT_ID_LENGTH
from ..exceptions import OutOfRangeError, ValidationError

T = TypeVar('T')


class ObservableProperty:
    """Property descriptor that emits signals on change"""

    def __init__(self, initial_value=None, validator: Optional[Callable[[Any], Any]] = None):
        self.value = initial_value
        self.validator = validator
        self.name = None

    def __set_name__(self, owner, name):
        self.name = name
        self.private_name = f'_{name}'

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return getattr(obj, self.private_name, self.value)

    def __set__(self, obj, value):
        if self.validator is not None:
            value = self.validator(value)
        old_value = getattr(obj, self.private_name, self.value)
        if old_value != value:
            setattr(obj, self.private_name, value)
            signal_name = f'{self.name}_changed'
            if hasattr(obj, signal_name):
                getattr(obj, signal_name).emit(value)
            if hasattr(obj, 'property_changed'):
                obj.property_changed.emit(self.name, value)


class BaseModel(QObject):
    """Base class for observable models"""

    # General property change signal
    property_changed = pyqtSignal(str, object)  # property_name, new_value

    def __init__(self, parent=None):
        super().__init__(parent)

    @classmethod
    def observable_names(cls) -> List[str]:
        names = []
        for klass in reversed(cls.__mro__):
            for attr_name, attr in vars(klass).items():
                if isinstance(attr, ObservableProperty) and attr_name not in names:
                    names.append(attr_name)
        return names

    def to_dict(self) -> dict:
        """Convert model to dictionary (for serialization)"""
        return {name: getattr(self, name) for name in self.observable_names()}

    def from_dict(self, data: dict):
        """Load model from dictionary, unknown keys are ignored"""
        names = self.observable_names()
        for key, value in data.items():
            if key in names:
                setattr(self, key, value)


class ItemListModel(QObject):
    """
    Ordered list with change notification.

    Every structural mutation emits list_changed(action, index), where
    action is one of 'add', 'insert', 'set', 'remove' or 'clear'. Index is
    -1 for 'clear'.
    """

    list_changed = pyqtSignal(str, int)  # action, index

    item_type: Optional[type] = None
    item_name = 'item'

    def __init__(self, items=None, parent=None):
        super().__init__(parent)
        self._items: List[T] = []
        if items:
            for item in items:
                self._items.append(self._check_item(item))

    def _check_item(self, item):
        if self.item_type is not None and not isinstance(item, self.item_type):
            raise ValidationError(
                f"Expected {self.item_type.__name__}, got {type(item).__name__}")
        return item

    def _check_index(self, index: int, upper: Optional[int] = None) -> int:
        limit = len(self._items) if upper is None else upper
        if not isinstance(index, int) or index < 0 or index >= limit:
            raise OutOfRangeError(f"{self.item_name.capitalize()} index {index} is out of range")
        return index

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> T:
        return self.get_at(index)

    @property
    def length(self) -> int:
        return len(self._items)

    def get_at(self, index: int) -> T:
        return self._items[self._check_index(index)]

    def get_all(self) -> List[T]:
        return list(self._items)

    def index_of(self, item: T) -> int:
        for i, existing in enumerate(self._items):
            if existing is item:
                return i
        return -1

    def add(self, item: T) -> int:
        self._items.append(self._check_item(item))
        index = len(self._items) - 1
        self.list_changed.emit('add', index)
        return index

    def insert_at(self, index: int, item: T):
        self._check_index(index, len(self._items) + 1)
        self._items.insert(index, self._check_item(item))
        self.list_changed.emit('insert', index)

    def set_at(self, index: int, item: T):
        self._check_index(index)
        self._items[index] = self._check_item(item)
        self.list_changed.emit('set', index)

    def remove_at(self, index: int) -> T:
        self._check_index(index)
        item = self._items.pop(index)
        self.list_changed.emit('remove', index)
        return item

    def clear(self):
        self._items.clear()
        self.list_changed.emit('clear', -1)


def generate_id() -> str:
    """Random 16 character hex identifier"""
    return secrets.token_hex(PROJECT_ID_LENGTH // 2)
