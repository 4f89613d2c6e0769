from dataclasses import dataclass


@dataclass(frozen=True)
class InitialScreen:
    """Splash shown while a cycle is in flight."""
    tag = "initial"
    terminal = False


@dataclass(frozen=True)
class PrimaryInterface:
    """The local interface: no destination, or the destination did not check out."""
    tag = "primary"
    terminal = True


@dataclass(frozen=True)
class BrowserContent:
    destination: str
    tag = "browser"
    terminal = True


@dataclass(frozen=True)
class FailureMessage:
    """Blocking error text for a failed configuration fetch. The view offers a retry."""
    text: str
    tag = "failure"
    terminal = True
    retryable = True


NavigationState = InitialScreen | PrimaryInterface | BrowserContent | FailureMessage
