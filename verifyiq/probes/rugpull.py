"""
Token contract probes.

honeypot_simulation asks HoneyPot.is to simulate a buy and a sell of the
token. address_pattern is a purely local heuristic.
"""
import logging
from typing import List

from ..blocklists import SCAM_TOKEN_PATTERNS
from ..domain.errors import ProbeError
from ..domain.kinds import ProbeId
from ..domain.subjects import ContractSubject
from .base import Probe
from .context import ScanContext

logger = logging.getLogger(__name__)

LOW_LIQUIDITY_USD = 1000


def _number(value, default=0.0) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value)


def parse_honeypot_response(data) -> dict:
    """Flatten the HoneyPot.is v2 response into the fields we score on."""
    if not isinstance(data, dict):
        raise ProbeError("HoneyPot.is returned a non-object body")
    if "honeypotResult" not in data and "simulationResult" not in data:
        raise ProbeError("HoneyPot.is response has no simulation result")

    honeypot = data.get("honeypotResult") or {}
    simulation = data.get("simulationResult") or {}
    pair = data.get("pair") or {}
    token = data.get("token") or {}

    return {
        "is_honeypot": bool(honeypot.get("isHoneypot", False)),
        "buy_tax": round(_number(simulation.get("buyTax")), 2),
        "sell_tax": round(_number(simulation.get("sellTax")), 2),
        "liquidity": _number(pair.get("liquidity")),
        "lp_locked": bool(pair.get("liquidityLocked", False)),
        "token_name": token.get("name") or "",
        "token_symbol": token.get("symbol") or "",
    }


def honeypot_credit(signal: dict):
    """
    Simulation result -> (credit, signals).

    honeypot or sell tax > 50%      -> 0.0
    sell tax > 10%                  -> at most 0.3
    liquidity under $1000           -> at most 0.3
    buy tax > 10%                   -> at most 0.6
    LP not locked                   -> x0.85
    scam-style token name           -> x0.7
    """
    signals = []
    if signal["is_honeypot"]:
        signals.append("HONEYPOT: token cannot be sold")
        return 0.0, signals
    if signal["sell_tax"] > 50:
        signals.append(f"Extreme sell tax: {signal['sell_tax']}%")
        return 0.0, signals

    credit = 1.0
    if signal["sell_tax"] > 10:
        credit = min(credit, 0.3)
        signals.append(f"High sell tax: {signal['sell_tax']}%")
    if signal["liquidity"] < LOW_LIQUIDITY_USD:
        credit = min(credit, 0.3)
        signals.append(f"Low liquidity: ${signal['liquidity']:,.0f}")
    if signal["buy_tax"] > 10:
        credit = min(credit, 0.6)
        signals.append(f"High buy tax: {signal['buy_tax']}%")
    if not signal["lp_locked"]:
        credit *= 0.85
        signals.append("LP not locked")
    name = f"{signal['token_name']} {signal['token_symbol']}"
    if any(p.search(name) for p in SCAM_TOKEN_PATTERNS):
        credit *= 0.7
        signals.append(f"\"{signal['token_name']}\" matches scam token naming patterns")
    return round(credit, 4), signals


class HoneypotSimulationProbe(Probe):
    probe_id = ProbeId.HONEYPOT_SIMULATION

    def __init__(self, ctx: ScanContext):
        self.ctx = ctx
        self.timeout = ctx.config.network_probe_timeout

    async def probe(self, subject: ContractSubject):
        data = await self.ctx.http.get_json(self.ctx.config.honeypot_api_url, params={
            "address": subject.address,
            "chainID": subject.chain_id,
        })
        signal = parse_honeypot_response(data)
        credit, signals = honeypot_credit(signal)
        explanation = "; ".join(signals) if signals else "No honeypot detected"
        return self.ok(credit, explanation, signals=signals, **signal)


class AddressPatternProbe(Probe):
    """Addresses with more than 20 zero digits are often test or vanity scam deployments."""
    probe_id = ProbeId.ADDRESS_PATTERN

    async def probe(self, subject: ContractSubject):
        zeros = subject.address[2:].count("0")
        if zeros > 20:
            return self.ok(0.3, "Unusual address pattern (high zero count)", zero_count=zeros)
        return self.ok(1.0, "Ordinary address pattern", zero_count=zeros)


def build_rugpull_probes(ctx: ScanContext) -> List[Probe]:
    return [HoneypotSimulationProbe(ctx), AddressPatternProbe()]
