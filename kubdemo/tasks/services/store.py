"""
Append-only task store.

Tasks are kept in a JSON Lines file, one ``{"text": ..., "userId": ...}``
object per line. JSON string escaping takes care of newlines in task text, so
a record always occupies exactly one line.

A single :class:`TaskStore` is attached to the application by
:func:`init_app` and shared by all request handlers. Appends and reads are
serialized by an in-process lock and by a :class:`filelock.FileLock` beside
the data file, so that several worker processes sharing the same volume never
interleave partial writes or read a half-written line.
"""

import json
import os
import threading
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from filelock import FileLock, Timeout
from flask import Flask, current_app

from kubdemo.base import logging
from kubdemo.base.exceptions import StorageFailure
from kubdemo.tasks.domain import Task

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'task_store'


class TaskStore(object):
    """Owns the on-disk sequence of tasks."""

    def __init__(self, path: str, lock_timeout: float = 10.0) -> None:
        """Set up the store; the file is created on first append."""
        self.path = path
        self.lock_timeout = lock_timeout
        self._lock = threading.Lock()
        self._file_lock = FileLock(f'{path}.lock', timeout=lock_timeout)

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        try:
            os.makedirs(os.path.dirname(os.path.abspath(self.path)),
                        exist_ok=True)
        except OSError as e:
            raise StorageFailure(f'Cannot create task folder: {e}') from e
        with self._lock:
            try:
                self._file_lock.acquire()
            except Timeout as e:
                raise StorageFailure('Timed out waiting for task store') from e
            try:
                yield
            finally:
                self._file_lock.release()

    def append(self, task: Task) -> Task:
        """
        Add a task to the end of the store.

        Parameters
        ----------
        task : :class:`.Task`

        Returns
        -------
        :class:`.Task`
            The stored task.

        Raises
        ------
        :class:`.StorageFailure`
            If the task could not be written. The store is left as it was.

        """
        line = json.dumps(task.to_dict(), ensure_ascii=False) + '\n'
        with self._exclusive():
            size = self._size()
            try:
                with open(self.path, 'a', encoding='utf-8') as f:
                    f.write(line)
                    f.flush()
                    os.fsync(f.fileno())
            except (OSError, UnicodeError) as e:
                logger.error('Failed to append task: %s', e)
                self._truncate(size)
                raise StorageFailure(f'Could not store task: {e}') from e
        logger.debug('Stored task for user %s', task.user_id)
        return task

    def list(self) -> List[Task]:
        """
        Get all tasks, in the order in which they were appended.

        Raises
        ------
        :class:`.StorageFailure`
            If the store cannot be read or contains a malformed record.

        """
        with self._exclusive():
            if not os.path.exists(self.path):
                return []
            try:
                with open(self.path, encoding='utf-8') as f:
                    lines = f.readlines()
            except OSError as e:
                logger.error('Failed to read tasks: %s', e)
                raise StorageFailure(f'Could not read tasks: {e}') from e
        return [self._parse(n, line) for n, line in enumerate(lines, 1)
                if line.strip()]

    def _parse(self, lineno: int, line: str) -> Task:
        try:
            data: Any = json.loads(line)
            return Task(text=data['text'], user_id=data['userId'])
        except (json.decoder.JSONDecodeError, KeyError, TypeError) as e:
            logger.error('Malformed task record at line %i', lineno)
            raise StorageFailure(f'Malformed task at line {lineno}') from e

    def _size(self) -> int:
        try:
            return os.path.getsize(self.path)
        except FileNotFoundError:
            return 0
        except OSError as e:
            raise StorageFailure(f'Cannot stat task store: {e}') from e

    def _truncate(self, size: int) -> None:
        try:
            if os.path.exists(self.path):
                os.truncate(self.path, size)
        except OSError as e:
            logger.error('Could not roll back partial write: %s', e)


def init_app(app: Flask) -> None:
    """Set configuration defaults and attach a store to the application."""
    app.config.setdefault('TASKS_FOLDER', 'tasks')
    app.config.setdefault('TASKS_FILE', 'tasks.jsonl')
    app.config.setdefault('TASKS_LOCK_TIMEOUT', '10')
    path = os.path.join(app.config['TASKS_FOLDER'], app.config['TASKS_FILE'])
    timeout = float(app.config['TASKS_LOCK_TIMEOUT'])
    app.extensions[EXTENSION_KEY] = TaskStore(path, lock_timeout=timeout)


def current_store(app: Optional[Flask] = None) -> TaskStore:
    """Get the :class:`.TaskStore` attached to the (current) application."""
    app = app or current_app
    return app.extensions[EXTENSION_KEY]   # type: ignore
