"""Remote definition lookups used to validate and gloss words.

A word missing from the local dictionary is checked against an ordered list of
providers. The first provider that answers wins; a provider that times out,
errors or does not know the word is logged and skipped. Nothing a provider
raises escapes DefinitionResolver.resolve.
"""

import json
import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar
from urllib.parse import quote

import requests
from markupsafe import Markup

from .errors import ProviderFailure, StartupError

T = TypeVar('T')

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Gloss:
    word: str
    part_of_speech: str = ''
    definition: str = ''


@dataclass(frozen=True)
class Resolution:
    accepted: bool
    gloss: Optional[Gloss] = None


def perform(operation: Callable[[float], T], timeout: float, max_attempts: int = 1) -> T:
    """Call ``operation(timeout)`` until it succeeds, at most ``max_attempts`` times.

    Attempts are immediate (no backoff). The last ProviderFailure is re-raised
    when every attempt fails.
    """
    last_error = None
    for _ in range(max(1, max_attempts)):
        try:
            return operation(timeout)
        except ProviderFailure as exc:
            last_error = exc
    raise last_error


class DefinitionProvider:
    """Base class for remote lookups. Subclasses implement ``lookup``."""

    name = 'provider'
    clock = time.monotonic
    max_body_bytes = 256 * 1024

    def __init__(self, session: Optional[requests.Session] = None, max_attempts: int = 1):
        self.session = session or requests.Session()
        self.max_attempts = max_attempts

    def lookup(self, word: str, timeout: float) -> Gloss:
        raise NotImplementedError

    def _get_json(self, word: str, url: str, timeout: float, params: Optional[dict] = None):
        # requests applies ``timeout`` per socket operation, so a server that
        # trickles its body could run past it; the deadline bounds the whole call.
        deadline = self.clock() + timeout
        try:
            with self.session.get(url, params=params, timeout=timeout, stream=True) as response:
                if response.status_code != 200:
                    raise ProviderFailure(self.name, word, f"HTTP {response.status_code}")
                body = bytearray()
                for chunk in response.iter_content(chunk_size=4096):
                    body.extend(chunk)
                    if self.clock() > deadline:
                        raise ProviderFailure(self.name, word, f"exceeded {timeout}s deadline")
                    if len(body) > self.max_body_bytes:
                        raise ProviderFailure(self.name, word, 'response body too large')
        except requests.exceptions.Timeout as exc:
            raise ProviderFailure(self.name, word, f"timed out after {timeout}s") from exc
        except requests.exceptions.RequestException as exc:
            raise ProviderFailure(self.name, word, str(exc)) from exc
        try:
            return json.loads(bytes(body))
        except ValueError as exc:
            raise ProviderFailure(self.name, word, 'invalid JSON body') from exc

    def __repr__(self) -> str:
        return f"<{type(self).__name__} max_attempts={self.max_attempts}>"


class FreeDictionaryProvider(DefinitionProvider):
    """https://dictionaryapi.dev/ entries endpoint."""

    name = 'dictionaryapi'
    url = 'https://api.dictionaryapi.dev/api/v2/entries/en/{word}'

    def lookup(self, word: str, timeout: float) -> Gloss:
        data = self._get_json(word, self.url.format(word=quote(word, safe='')), timeout)
        if not data or not isinstance(data, list) or not isinstance(data[0], dict):
            raise ProviderFailure(self.name, word, 'unexpected response format')
        entry = data[0]
        for meaning in entry.get('meanings') or []:
            for definition in meaning.get('definitions') or []:
                text = definition.get('definition')
                if text:
                    return Gloss(word=entry.get('word') or word,
                                 part_of_speech=meaning.get('partOfSpeech') or '',
                                 definition=text)
        raise ProviderFailure(self.name, word, 'no definitions in response')


class DatamuseProvider(DefinitionProvider):
    """https://www.datamuse.com/api/ spelled-like query with definitions."""

    name = 'datamuse'
    url = 'https://api.datamuse.com/words'
    # Datamuse tags definitions with an abbreviated part of speech
    parts_of_speech = {'n': 'noun', 'v': 'verb', 'adj': 'adjective', 'adv': 'adverb', 'u': ''}

    def lookup(self, word: str, timeout: float) -> Gloss:
        data = self._get_json(word, self.url, timeout, params={'sp': word, 'md': 'd', 'max': 1})
        if not isinstance(data, list):
            raise ProviderFailure(self.name, word, 'unexpected response format')
        for item in data:
            if not isinstance(item, dict) or str(item.get('word', '')).lower() != word.lower():
                continue
            for raw in item.get('defs') or []:
                pos, _, text = raw.partition('\t')
                if text:
                    return Gloss(word=item['word'],
                                 part_of_speech=self.parts_of_speech.get(pos, pos),
                                 definition=text)
        raise ProviderFailure(self.name, word, 'word not found')


PROVIDERS = {
    FreeDictionaryProvider.name: FreeDictionaryProvider,
    DatamuseProvider.name: DatamuseProvider,
}


def build_providers(names: Iterable[str], session: Optional[requests.Session] = None,
                    max_attempts: int = 1) -> List[DefinitionProvider]:
    """Instantiate providers by name, in order, sharing one HTTP session."""
    session = session or requests.Session()
    providers = []
    for name in names:
        name = name.strip().lower()
        if not name:
            continue
        if name not in PROVIDERS:
            raise StartupError(f"Unknown definition provider '{name}'")
        providers.append(PROVIDERS[name](session=session, max_attempts=max_attempts))
    return providers


class DefinitionResolver:
    def __init__(self, providers: Sequence[DefinitionProvider], timeout: float = 2.0,
                 logger: Optional[logging.Logger] = None):
        self.providers = list(providers)
        self.timeout = timeout
        self.logger = logger or log

    def resolve(self, word: str) -> Resolution:
        for provider in self.providers:
            try:
                gloss = perform(lambda t: provider.lookup(word, t), self.timeout, provider.max_attempts)
            except ProviderFailure as exc:
                self.logger.info(f"[definitions] provider={provider.name} word={word!r} failed: {exc.reason}")
                continue
            except Exception as exc:
                self.logger.warning(f"[definitions] provider={provider.name} word={word!r} crashed: {exc!r}")
                continue
            return Resolution(accepted=True, gloss=gloss)
        return Resolution(accepted=False)


def format_gloss(gloss: Gloss) -> Markup:
    """Render a gloss as an HTML fragment with all provider text escaped."""
    pos = Markup(' (<i>{}</i>)').format(gloss.part_of_speech) if gloss.part_of_speech else ''
    return Markup('<b>{}</b>{}: {}<br>').format(gloss.word, pos, gloss.definition)
