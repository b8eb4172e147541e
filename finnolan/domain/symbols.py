"""Static symbol catalogue: logical symbols -> Yahoo Finance symbols."""
from typing import Dict, List, Optional

from finnolan.domain.entities import AssetClass, SymbolInfo

DEFAULT_SUFFIX = ".NS"

INDICES: Dict[str, SymbolInfo] = {
    info.symbol: info
    for info in [
        SymbolInfo(symbol="NIFTY", provider_symbol="^NSEI", name="NIFTY 50", asset_class=AssetClass.INDEX),
        SymbolInfo(symbol="SENSEX", provider_symbol="^BSESN", name="SENSEX", asset_class=AssetClass.INDEX),
        SymbolInfo(symbol="BANKNIFTY", provider_symbol="^NSEBANK", name="NIFTY BANK", asset_class=AssetClass.INDEX),
    ]
}

# NSE equities
_NSE_NAMES = {
    "RELIANCE": "Reliance Industries",
    "TCS": "Tata Consultancy Services",
    "HDFCBANK": "HDFC Bank",
    "INFY": "Infosys",
    "ICICIBANK": "ICICI Bank",
    "SBIN": "State Bank of India",
    "BHARTIARTL": "Bharti Airtel",
    "ITC": "ITC Limited",
    "KOTAKBANK": "Kotak Mahindra Bank",
    "LT": "Larsen & Toubro",
    "WIPRO": "Wipro",
    "AXISBANK": "Axis Bank",
    "TATAMOTORS": "Tata Motors",
    "MARUTI": "Maruti Suzuki",
    "SUNPHARMA": "Sun Pharma",
    "HINDUNILVR": "Hindustan Unilever",
    "BAJFINANCE": "Bajaj Finance",
    "ASIANPAINT": "Asian Paints",
    "HCLTECH": "HCL Technologies",
    "TITAN": "Titan Company",
    "ULTRACEMCO": "UltraTech Cement",
    "NTPC": "NTPC",
    "POWERGRID": "Power Grid Corporation",
    "ONGC": "Oil & Natural Gas Corporation",
    "TATASTEEL": "Tata Steel",
    "ADANIENT": "Adani Enterprises",
    "TECHM": "Tech Mahindra",
    "NESTLEIND": "Nestle India",
    "COALINDIA": "Coal India",
    "ZOMATO": "Zomato",
}

_CRYPTO_NAMES = {
    "BTC": "Bitcoin",
    "ETH": "Ethereum",
    "SOL": "Solana",
    "XRP": "Ripple",
    "DOGE": "Dogecoin",
    "ADA": "Cardano",
    "BNB": "BNB",
}

_INTERNATIONAL_NAMES = {
    "AAPL": "Apple",
    "MSFT": "Microsoft",
    "GOOGL": "Alphabet",
    "AMZN": "Amazon",
    "TSLA": "Tesla",
    "NVDA": "NVIDIA",
}

EQUITIES: Dict[str, SymbolInfo] = {
    symbol: SymbolInfo(symbol=symbol, provider_symbol=f"{symbol}{DEFAULT_SUFFIX}", name=name)
    for symbol, name in _NSE_NAMES.items()
}

CRYPTO: Dict[str, SymbolInfo] = {
    symbol: SymbolInfo(
        symbol=symbol, provider_symbol=f"{symbol}-INR", name=name, asset_class=AssetClass.CRYPTO
    )
    for symbol, name in _CRYPTO_NAMES.items()
}

INTERNATIONAL: Dict[str, SymbolInfo] = {
    symbol: SymbolInfo(symbol=symbol, provider_symbol=symbol, name=name)
    for symbol, name in _INTERNATIONAL_NAMES.items()
}

CATALOGUE: Dict[str, SymbolInfo] = {**INDICES, **EQUITIES, **CRYPTO, **INTERNATIONAL}

# Fixed set shown on the market overview
DASHBOARD_INDICES: List[str] = ["NIFTY", "SENSEX", "BANKNIFTY"]
DASHBOARD_STOCKS: List[str] = ["RELIANCE", "TCS", "HDFCBANK", "INFY", "ICICIBANK"]

EXAMPLE_SYMBOLS: List[str] = ["RELIANCE", "TCS", "HDFCBANK", "INFY", "ICICIBANK"]


def normalize(symbol: str) -> str:
    return (symbol or "").strip().upper()


def resolve(symbol: str) -> Optional[SymbolInfo]:
    """Look up a logical symbol in the catalogue."""
    return CATALOGUE.get(normalize(symbol))


def fallback(symbol: str) -> SymbolInfo:
    """Unmapped symbol tried verbatim with the default exchange suffix."""
    symbol = normalize(symbol)
    provider_symbol = symbol if symbol.endswith(DEFAULT_SUFFIX) else f"{symbol}{DEFAULT_SUFFIX}"
    return SymbolInfo(symbol=symbol, provider_symbol=provider_symbol, name=symbol)


def resolve_or_fallback(symbol: str) -> SymbolInfo:
    return resolve(symbol) or fallback(symbol)
