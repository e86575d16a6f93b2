# state.py
from __future__ import annotations
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple, Union

from options import Configuration, Disk, LocaleInfo, WizardStep, to_summary
from validators import (
    BootdiskInput, ErrorKind, LicenseInput, NetworkInput, PasswordInput,
    TimezoneInput, ValidationError, ValidationResult, validate_bootdisk,
    validate_network, validate_password, validate_timezone,
)
from logger import log

StepInput = Union[LicenseInput, BootdiskInput, TimezoneInput, PasswordInput, NetworkInput]


class WizardStateError(RuntimeError):
    """Raised when the wizard is driven through a transition it does not have."""


class WizardState:
    """
    Owns the Configuration for one wizard session and gates every step.

    Transitions either commit fully (validated value written, step advanced)
    or leave both step and configuration untouched. Going back never discards
    committed values; re-advancing re-validates and may overwrite them.
    """

    def __init__(
        self,
        disks: Sequence[Disk],
        locales: LocaleInfo,
        interactive: bool = True,
    ) -> None:
        if not disks:
            raise ValueError("WizardState needs at least one disk")
        self.disks: Tuple[Disk, ...] = tuple(disks)
        self.locales = locales
        self.interactive = interactive
        self.step = WizardStep.LICENSE
        self.config: Optional[Configuration] = Configuration.defaults_from(self.disks[0])
        self.committed: Set[WizardStep] = set()
        self.reboot_after_install = False
        self.abort_pending = False
        self.aborted = False
        self.last_error: Optional[ValidationError] = None

        self._handlers: Dict[WizardStep, Callable[[StepInput], ValidationResult]] = {
            WizardStep.LICENSE: self._commit_license,
            WizardStep.BOOTDISK: self._commit_bootdisk,
            WizardStep.TIMEZONE: self._commit_timezone,
            WizardStep.PASSWORD: self._commit_password,
            WizardStep.NETWORK: self._commit_network,
        }

    @property
    def is_terminal(self) -> bool:
        return self.step is WizardStep.SUMMARY

    # -- Transitions -----------------------------------------------------------

    def advance(self, candidate: StepInput) -> ValidationResult[Configuration]:
        if self.aborted:
            return self._fail(ValidationError("the installation was aborted", ErrorKind.STATE))
        if self.is_terminal:
            return self._fail(ValidationError("summary is the last step", ErrorKind.STATE))
        if candidate.step is not self.step:
            raise TypeError(
                f"{type(candidate).__name__} cannot be submitted "
                f"on the {self.step.title} step"
            )

        result = self._handlers[self.step](candidate)
        if not result.ok:
            return self._fail(result.error)

        self.committed.add(self.step)
        self.step = WizardStep(self.step + 1)
        self.last_error = None
        log.info("Wizard advanced to %s", self.step.title)
        return ValidationResult.success(self.config)

    def retreat(self) -> WizardStep:
        if not self.aborted:
            self.step = WizardStep(max(self.step - 1, WizardStep.LICENSE))
            self.last_error = None
            log.info("Wizard went back to %s", self.step.title)
        return self.step

    def request_abort(self) -> bool:
        """Start the abort flow. Returns True if the wizard is now aborted."""
        if self.aborted:
            return True
        if not self.interactive:
            self._abort()
            return True
        self.abort_pending = True
        log.info("Abort requested on %s, waiting for confirmation", self.step.title)
        return False

    def confirm_abort(self, confirmed: bool) -> bool:
        self.abort_pending = False
        if confirmed:
            self._abort()
        else:
            log.info("Abort declined, staying on %s", self.step.title)
        return self.aborted

    def set_reboot_after_install(self, reboot: bool) -> None:
        self.reboot_after_install = reboot

    # -- Queries ---------------------------------------------------------------

    def candidate_for(self, step: WizardStep) -> Optional[StepInput]:
        """Input record pre-populated from the last committed (or default) values."""
        if self.config is None:
            return None
        if step is WizardStep.LICENSE:
            return LicenseInput(agree=WizardStep.LICENSE in self.committed)
        if step is WizardStep.BOOTDISK:
            return BootdiskInput.from_options(self.config.bootdisk)
        if step is WizardStep.TIMEZONE:
            return TimezoneInput.from_options(self.config.timezone)
        if step is WizardStep.PASSWORD:
            return PasswordInput.from_options(self.config.password)
        if step is WizardStep.NETWORK:
            return NetworkInput.from_options(self.config.network)
        return None

    def summary(self) -> List[Tuple[str, str]]:
        if self.config is None:
            raise WizardStateError("the installation was aborted")
        return to_summary(self.config)

    def handoff(self) -> Tuple[Configuration, bool]:
        """The finished configuration for the install stage."""
        if self.aborted or self.config is None:
            raise WizardStateError("the installation was aborted")
        if not self.is_terminal:
            raise WizardStateError(
                f"cannot install from the {self.step.title} step"
            )
        log.info("Handing off configuration (reboot=%s)", self.reboot_after_install)
        return self.config, self.reboot_after_install

    # -- Internals -------------------------------------------------------------

    def _fail(self, error: ValidationError) -> ValidationResult[Configuration]:
        self.last_error = error
        log.info("%s step rejected: %s", self.step.title, error.reason)
        return ValidationResult(error=error)

    def _abort(self) -> None:
        self.aborted = True
        self.abort_pending = False
        self.config = None
        self.committed.clear()
        log.warning("Installation aborted on %s", self.step.title)

    def _commit_license(self, candidate: LicenseInput) -> ValidationResult:
        if not candidate.agree:
            self.request_abort()
            return ValidationResult.failure("license agreement declined", ErrorKind.STATE)
        return ValidationResult.success(True)

    def _commit_bootdisk(self, candidate: BootdiskInput) -> ValidationResult:
        result = validate_bootdisk(candidate, self.disks)
        if result.ok:
            self.config = replace(self.config, bootdisk=result.value)
        return result

    def _commit_timezone(self, candidate: TimezoneInput) -> ValidationResult:
        result = validate_timezone(candidate, self.locales)
        if result.ok:
            self.config = replace(self.config, timezone=result.value)
        return result

    def _commit_password(self, candidate: PasswordInput) -> ValidationResult:
        result = validate_password(candidate)
        if result.ok:
            self.config = replace(self.config, password=result.value)
        return result

    def _commit_network(self, candidate: NetworkInput) -> ValidationResult:
        result = validate_network(candidate)
        if result.ok:
            self.config = replace(self.config, network=result.value)
        return result
