"""UISurface interface - every interaction with the booking app goes here."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from .errors import ElementNotFoundError

logger = logging.getLogger(__name__)


class UISurface(ABC):
    """Interface to the rendered booking wizard, addressed by data-testid."""

    @abstractmethod
    def open(self, path: str) -> None:
        """Navigate to a path and wait until the network is idle."""
        pass

    @abstractmethod
    def count(self, prefix: str) -> int:
        """Number of rendered elements whose identifier starts with prefix."""
        pass

    @abstractmethod
    def first_test_id(self, prefix: str, timeout_ms: int) -> str:
        """Wait for the first element with prefix to be visible and return its identifier.

        Raises:
            ElementNotFoundError: If it does not become visible in time
        """
        pass

    @abstractmethod
    def wait_visible(self, test_id: str, timeout_ms: int) -> None:
        """Wait for an element to be visible.

        Raises:
            ElementNotFoundError: If it does not become visible in time
        """
        pass

    @abstractmethod
    def wait_for_any(self, prefix: str, timeout_ms: int) -> None:
        """Wait for at least one element with prefix to be visible.

        Raises:
            ElementNotFoundError: If none becomes visible in time
        """
        pass

    @abstractmethod
    def wait_enabled(self, test_id: str, timeout_ms: int) -> bool:
        """Wait for an element to be enabled. Returns False on timeout."""
        pass

    @abstractmethod
    def is_enabled(self, test_id: str) -> bool:
        pass

    @abstractmethod
    def is_writable(self, test_id: str) -> bool:
        """True when the field accepts input (enabled and not read-only)."""
        pass

    @abstractmethod
    def click(self, test_id: str) -> None:
        pass

    @abstractmethod
    def fill(self, test_id: str, value: str) -> None:
        pass

    @abstractmethod
    def text_content(self, test_id: str) -> str:
        pass

    @abstractmethod
    def input_value(self, test_id: str) -> str:
        pass

    @abstractmethod
    def current_url(self) -> str:
        pass

    @abstractmethod
    def wait(self, ms: int) -> None:
        """Fixed delay, used only by settle policies."""
        pass


class PlaywrightSurface(UISurface):
    """Real implementation - drives a Playwright page."""

    def __init__(self, page, navigation_timeout_ms: int = 30000):
        """Initialize with an open page.

        Args:
            page: playwright.sync_api.Page, ideally from a context created
                with base_url so relative paths resolve
            navigation_timeout_ms: Timeout for page loads
        """
        self.page = page
        self.navigation_timeout_ms = navigation_timeout_ms

    def _by_test_id(self, test_id: str):
        return self.page.get_by_test_id(test_id)

    def _by_prefix(self, prefix: str):
        return self.page.locator(f'[data-testid^="{prefix}"]')

    def _wait_visible(self, locator, target: str, timeout_ms: int) -> None:
        from playwright.sync_api import TimeoutError as PWTimeoutError

        try:
            locator.wait_for(state="visible", timeout=timeout_ms)
        except PWTimeoutError:
            raise ElementNotFoundError(target, timeout_ms) from None

    def open(self, path: str) -> None:
        logger.debug("Opening %s", path)
        self.page.goto(path, timeout=self.navigation_timeout_ms)
        self.page.wait_for_load_state("networkidle", timeout=self.navigation_timeout_ms)

    def count(self, prefix: str) -> int:
        return self._by_prefix(prefix).count()

    def first_test_id(self, prefix: str, timeout_ms: int) -> str:
        first = self._by_prefix(prefix).first
        self._wait_visible(first, f"{prefix}*", timeout_ms)
        return first.get_attribute("data-testid")

    def wait_visible(self, test_id: str, timeout_ms: int) -> None:
        self._wait_visible(self._by_test_id(test_id), test_id, timeout_ms)

    def wait_for_any(self, prefix: str, timeout_ms: int) -> None:
        self._wait_visible(self._by_prefix(prefix).first, f"{prefix}*", timeout_ms)

    def wait_enabled(self, test_id: str, timeout_ms: int) -> bool:
        from playwright.sync_api import expect

        try:
            expect(self._by_test_id(test_id)).to_be_enabled(timeout=timeout_ms)
        except AssertionError:
            return False
        return True

    def is_enabled(self, test_id: str) -> bool:
        return self._by_test_id(test_id).is_enabled()

    def is_writable(self, test_id: str) -> bool:
        return self._by_test_id(test_id).is_editable()

    def click(self, test_id: str) -> None:
        logger.debug("Click %s", test_id)
        self._by_test_id(test_id).click()

    def fill(self, test_id: str, value: str) -> None:
        logger.debug("Fill %s", test_id)
        self._by_test_id(test_id).fill(value)

    def text_content(self, test_id: str) -> str:
        return self._by_test_id(test_id).text_content() or ''

    def input_value(self, test_id: str) -> str:
        return self._by_test_id(test_id).input_value()

    def current_url(self) -> str:
        return self.page.url

    def wait(self, ms: int) -> None:
        self.page.wait_for_timeout(ms)


class MockSurface(UISurface):
    """Mock for testing - an in-memory element table that records calls.

    Elements keep insertion order, which stands in for the page's native
    ordering. Hooks let a fake application re-render after interactions.
    Waits never block: an element that is not visible right now times out.
    """

    def __init__(self):
        self.calls: List[tuple] = []
        self.elements: Dict[str, Dict[str, Any]] = {}
        self.url = ''
        self.on_open: Optional[Callable[[str], None]] = None
        self.on_click: Optional[Callable[[str], None]] = None
        self.on_fill: Optional[Callable[[str, str], None]] = None

    def add_element(self, test_id: str, visible: bool = True, enabled: bool = True,
                    read_only: bool = False, text: str = '', value: str = '') -> None:
        self.elements[test_id] = {
            'visible': visible,
            'enabled': enabled,
            'read_only': read_only,
            'text': text,
            'value': value,
        }

    def clear(self) -> None:
        self.elements.clear()

    def _matching(self, prefix: str) -> List[str]:
        return [test_id for test_id in self.elements if test_id.startswith(prefix)]

    def _get(self, test_id: str) -> Dict[str, Any]:
        if test_id not in self.elements:
            raise ElementNotFoundError(test_id)
        return self.elements[test_id]

    def _require_visible(self, test_id: str, timeout_ms: Optional[int] = None) -> Dict[str, Any]:
        element = self.elements.get(test_id)
        if element is None or not element['visible']:
            raise ElementNotFoundError(test_id, timeout_ms)
        return element

    def open(self, path: str) -> None:
        self.calls.append(('open', path))
        self.url = path
        if self.on_open:
            self.on_open(path)

    def count(self, prefix: str) -> int:
        self.calls.append(('count', prefix))
        return len(self._matching(prefix))

    def first_test_id(self, prefix: str, timeout_ms: int) -> str:
        self.calls.append(('first_test_id', prefix, timeout_ms))
        matching = self._matching(prefix)
        if not matching or not self.elements[matching[0]]['visible']:
            raise ElementNotFoundError(f"{prefix}*", timeout_ms)
        return matching[0]

    def wait_visible(self, test_id: str, timeout_ms: int) -> None:
        self.calls.append(('wait_visible', test_id, timeout_ms))
        self._require_visible(test_id, timeout_ms)

    def wait_for_any(self, prefix: str, timeout_ms: int) -> None:
        self.calls.append(('wait_for_any', prefix, timeout_ms))
        if not any(self.elements[test_id]['visible'] for test_id in self._matching(prefix)):
            raise ElementNotFoundError(f"{prefix}*", timeout_ms)

    def wait_enabled(self, test_id: str, timeout_ms: int) -> bool:
        self.calls.append(('wait_enabled', test_id, timeout_ms))
        return self._get(test_id)['enabled']

    def is_enabled(self, test_id: str) -> bool:
        self.calls.append(('is_enabled', test_id))
        return self._get(test_id)['enabled']

    def is_writable(self, test_id: str) -> bool:
        self.calls.append(('is_writable', test_id))
        element = self._get(test_id)
        return element['enabled'] and not element['read_only']

    def click(self, test_id: str) -> None:
        self.calls.append(('click', test_id))
        self._require_visible(test_id)
        if self.on_click:
            self.on_click(test_id)

    def fill(self, test_id: str, value: str) -> None:
        self.calls.append(('fill', test_id, value))
        element = self._require_visible(test_id)
        if element['read_only']:
            raise AssertionError(f"Cannot fill read-only field {test_id}")
        element['value'] = value
        if self.on_fill:
            self.on_fill(test_id, value)

    def text_content(self, test_id: str) -> str:
        self.calls.append(('text_content', test_id))
        return self._get(test_id)['text']

    def input_value(self, test_id: str) -> str:
        self.calls.append(('input_value', test_id))
        return self._get(test_id)['value']

    def current_url(self) -> str:
        return self.url

    def wait(self, ms: int) -> None:
        self.calls.append(('wait', ms))

    def calls_named(self, name: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == name]
