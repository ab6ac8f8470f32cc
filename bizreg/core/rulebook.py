"""RuleBook: incorporation rules loaded from YAML"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Tuple
from decimal import Decimal

from ..config import Config


class RuleBook:
    """Loads the regulatory constants used by validation and fee calculation

    Capital ratios, incorporator limits and the SEC/BIR fee schedule live in
    a YAML file so that a new schedule is a data change, not a code change.

    Attributes:
        rules_file: path of the loaded YAML file
        rules: parsed rule dictionary
        version: rule set version
    """

    def __init__(self, rules_file: Optional[str] = None):
        """
        Args:
            rules_file: rule file path (None uses the configured default)
        """
        self.rules_file = rules_file or Config.RULES_FILE
        self.rules = self._load_rules()
        self.version = self.rules.get('version', 'unknown')

    def _load_rules(self) -> Dict:
        """Read the YAML rule file

        Raises:
            FileNotFoundError: the rule file does not exist
            yaml.YAMLError: the file is not valid YAML
        """
        rules_path = Path(self.rules_file)

        if not rules_path.exists():
            raise FileNotFoundError(f"Rule file not found: {rules_path}")

        with open(rules_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)

    # ------------------------------------------------------------------
    # Capital structure
    # ------------------------------------------------------------------

    def get_min_subscribed_ratio(self) -> Decimal:
        """Minimum subscribed / authorized ratio (25%)"""
        capital = self.rules.get('capital_structure', {})
        return Decimal(str(capital.get('min_subscribed_ratio', 0.25)))

    def get_min_paid_up_ratio(self) -> Decimal:
        """Minimum paid-up / subscribed ratio (25%)"""
        capital = self.rules.get('capital_structure', {})
        return Decimal(str(capital.get('min_paid_up_ratio', 0.25)))

    def get_min_capital_amount(self) -> Decimal:
        capital = self.rules.get('capital_structure', {})
        return Decimal(str(capital.get('min_capital_amount', 1)))

    def get_min_par_value(self) -> Decimal:
        capital = self.rules.get('capital_structure', {})
        return Decimal(str(capital.get('min_par_value', 0.01)))

    # ------------------------------------------------------------------
    # Incorporators
    # ------------------------------------------------------------------

    def get_incorporator_limits(self) -> Tuple[int, int]:
        """Allowed number of incorporators

        Returns:
            (minimum, maximum) tuple
        """
        incorporators = self.rules.get('incorporators', {})
        return (
            int(incorporators.get('min_count', 1)),
            int(incorporators.get('max_count', 5))
        )

    def get_min_shares_subscribed(self) -> Decimal:
        incorporators = self.rules.get('incorporators', {})
        return Decimal(str(incorporators.get('min_shares_subscribed', 1)))

    # ------------------------------------------------------------------
    # Fee schedule
    # ------------------------------------------------------------------

    def get_sec_rate(self, fee_key: str) -> Dict[str, Any]:
        """Rate-based SEC fee ('filing_fee' or 'legal_research_fee')

        Returns:
            {'name', 'rate' (Decimal), 'basis', 'legal_basis'}

        Raises:
            KeyError: unknown fee key
        """
        fee = self.rules.get('sec_fees', {})[fee_key]
        return {
            'name': fee.get('name', fee_key),
            'rate': Decimal(str(fee.get('rate', 0))),
            'basis': fee.get('basis', 'authorized_capital'),
            'legal_basis': fee.get('legal_basis'),
        }

    def get_sec_fixed_fees(self) -> Dict[str, Dict[str, Any]]:
        """Fixed SEC fees in schedule order

        Returns:
            {fee_key: {'name', 'amount' (Decimal)}}
        """
        fixed = self.rules.get('sec_fees', {}).get('fixed', {})
        return {
            key: {
                'name': fee.get('name', key),
                'amount': Decimal(str(fee.get('amount', 0))),
            }
            for key, fee in fixed.items()
        }

    def get_dst_on_subscribed(self) -> Dict[str, Any]:
        fee = self.rules.get('bir_fees', {}).get('dst_on_subscribed', {})
        return {
            'name': fee.get('name', 'DST on Subscribed Shares'),
            'rate': Decimal(str(fee.get('rate', 0.01))),
            'legal_basis': fee.get('legal_basis'),
        }

    def get_lease_dst_schedule(self) -> Dict[str, Any]:
        """Progressive DST schedule on lease rent

        A flat base amount covers rent up to the base threshold; each
        started step above it adds the step amount.
        """
        fee = self.rules.get('bir_fees', {}).get('dst_on_lease', {})
        return {
            'name': fee.get('name', 'DST on Lease'),
            'base_amount': Decimal(str(fee.get('base_amount', 6))),
            'base_threshold': Decimal(str(fee.get('base_threshold', 2000))),
            'step_size': Decimal(str(fee.get('step_size', 1000))),
            'step_amount': Decimal(str(fee.get('step_amount', 2))),
            'legal_basis': fee.get('legal_basis'),
        }

    def get_rule_metadata(self) -> Dict[str, Any]:
        return {
            'version': self.version,
            'effective_date': self.rules.get('effective_date', ''),
            'description': self.rules.get('description', ''),
            'metadata': self.rules.get('metadata', {})
        }


# Process-wide rule book
_default_rulebook: Optional[RuleBook] = None


def get_default_rulebook() -> RuleBook:
    """Shared RuleBook instance, loaded on first use"""
    global _default_rulebook
    if _default_rulebook is None:
        _default_rulebook = RuleBook()
    return _default_rulebook


def reset_default_rulebook() -> None:
    """Drop the shared instance (mainly for tests)"""
    global _default_rulebook
    _default_rulebook = None
