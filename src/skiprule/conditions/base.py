"""Base condition contract."""

from abc import ABC, abstractmethod


class Condition(ABC):
    """Decides whether a test method must be skipped.

    Subclasses are named by ``conditional_skip`` markers and built fresh for
    every test invocation, so they should not rely on state carried over
    between tests.

    Two declaration shapes are supported:

    - a standalone class (module level, or nested in another class) whose
      constructor takes no arguments;
    - a class nested in the test suite class whose constructor takes the
      suite instance as its only argument.

    Examples:
        class OnCI(Condition):
            @property
            def is_satisfied(self) -> bool:
                return "CI" in os.environ

        class TestUpload:
            class NoCredentials(Condition):
                def __init__(self, suite: "TestUpload") -> None:
                    self.suite = suite

                @property
                def is_satisfied(self) -> bool:
                    return self.suite.token is None
    """

    @property
    @abstractmethod
    def is_satisfied(self) -> bool:
        """True if the annotated test must be skipped."""
