"""Flask web UI: flashcards, sentence generator, tile ordering and set picker."""

from __future__ import annotations

import random
import uuid
from collections import OrderedDict
from dataclasses import dataclass
from threading import Lock
from typing import Dict, List, Mapping, Optional, Sequence

from flask import Flask, Response, jsonify, request

from .config import StudyConfig
from .exercises import TargetItem, pick_exercise
from .generator import GenerationError, LengthClass, SentenceGenerator, grammar_hints
from .loader import VocabularySets, load_vocabulary_sets
from .logger import get_logger
from .models import VocabEntry
from .pool import resolve_pool
from .store import JsonSelectionStore, SelectionStore, toggle_selection
from .validator import validate
from .vocabulary import SET_IDS

logger = get_logger(__name__)


@dataclass
class StoredChallenge:
    item: TargetItem
    answer_order: List[str]
    id_to_token: Dict[str, str]


class ChallengeManager:
    """Tracks issued tile-ordering challenges so they can be validated."""

    def __init__(self, *, max_entries: int = 64, rng: Optional[random.Random] = None) -> None:
        self._lock = Lock()
        self._store: "OrderedDict[str, StoredChallenge]" = OrderedDict()
        self._max_entries = max_entries
        self._rng = rng or random.Random()

    def create_challenge(self, item: Optional[TargetItem] = None) -> Dict[str, object]:
        item = item or pick_exercise(self._rng)

        answer_order: List[str] = []
        id_to_token: Dict[str, str] = {}
        token_payload: List[Dict[str, str]] = []
        for token in item.tokens:
            token_id = uuid.uuid4().hex
            answer_order.append(token_id)
            id_to_token[token_id] = token
            token_payload.append({"id": token_id, "text": token})

        shuffled_payload = token_payload[:]
        self._rng.shuffle(shuffled_payload)

        challenge_id = uuid.uuid4().hex
        with self._lock:
            self._store[challenge_id] = StoredChallenge(item, answer_order, id_to_token)
            while len(self._store) > self._max_entries:
                self._store.popitem(last=False)

        return {
            "id": challenge_id,
            "prompt": item.english_prompt,
            "tokens": shuffled_payload,
            "token_count": len(item.tokens),
            "notes": list(item.notes),
            "audio": item.text,
        }

    def verify(self, challenge_id: str, selection: List[str]) -> Optional[Dict[str, object]]:
        with self._lock:
            stored = self._store.get(challenge_id)

        if stored is None:
            return None

        if any(token_id not in stored.id_to_token for token_id in selection):
            return {
                "correct": False,
                "complete": False,
                "message": "One or more selected tiles are not part of this challenge.",
            }

        if len(set(selection)) != len(selection):
            return {
                "correct": False,
                "complete": False,
                "message": "Each tile can only be used once.",
            }

        token_count = len(stored.answer_order)
        if len(selection) != token_count:
            return {
                "correct": False,
                "complete": False,
                "message": f"You have used {len(selection)} of {token_count} tiles. Keep going!",
            }

        answer = [stored.id_to_token[token_id] for token_id in selection]
        result = validate(stored.item.tokens, answer)
        if result.matched:
            with self._lock:
                self._store.pop(challenge_id, None)
            return {
                "correct": True,
                "complete": True,
                "message": "Correct!",
                "expected": stored.item.text,
                "notes": list(stored.item.notes),
            }

        return {
            "correct": False,
            "complete": True,
            "message": "Not quite. The highlighted tile is the first mistake.",
            "first_mismatch_index": result.first_mismatch_index,
            "notes": result.explanations,
        }

    def reveal(self, challenge_id: str) -> Optional[Dict[str, object]]:
        with self._lock:
            stored = self._store.pop(challenge_id, None)
        if stored is None:
            return None
        return {
            "order": list(stored.answer_order),
            "expected": stored.item.text,
            "notes": list(stored.item.notes),
        }


def _entry_payload(entry: VocabEntry) -> Dict[str, str]:
    return {"text": entry.text, "pinyin": entry.pinyin, "english": entry.english}


def _json_object() -> Optional[Dict[str, object]]:
    """Return the request body if it is a JSON object, otherwise None."""
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else None


class StudyState:
    """Process-wide collaborators the routes read from."""

    def __init__(
        self,
        config: StudyConfig,
        *,
        vocabulary_sets: Optional[Mapping[str, Sequence[VocabEntry]]] = None,
        selection_store: Optional[SelectionStore] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config
        self.vocabulary_sets: VocabularySets = (
            {key: tuple(value) for key, value in vocabulary_sets.items()}
            if vocabulary_sets is not None
            else load_vocabulary_sets(config.data_dir)
        )
        self.selection_store: SelectionStore = selection_store or JsonSelectionStore(
            config.selection_path, default_set_id=config.default_set_id
        )
        self.generator = SentenceGenerator(rng=rng, aspect_probability=config.aspect_probability)
        self.challenges = ChallengeManager(rng=rng)

    def pool(self) -> List[VocabEntry]:
        return resolve_pool(
            self.selection_store.get(), self.vocabulary_sets, self.config.default_set_id
        )


app = Flask(__name__)
_state: Optional[StudyState] = None
_state_lock = Lock()


def configure(
    config: Optional[StudyConfig] = None,
    *,
    vocabulary_sets: Optional[Mapping[str, Sequence[VocabEntry]]] = None,
    selection_store: Optional[SelectionStore] = None,
    rng: Optional[random.Random] = None,
) -> StudyState:
    """Replace the collaborators used by the routes."""
    global _state
    state = StudyState(
        config or StudyConfig.from_env(),
        vocabulary_sets=vocabulary_sets,
        selection_store=selection_store,
        rng=rng,
    )
    with _state_lock:
        _state = state
    return state


def get_state() -> StudyState:
    global _state
    with _state_lock:
        if _state is None:
            _state = StudyState(StudyConfig.from_env())
        return _state


_INDEX_HTML = """<!DOCTYPE html>
<html lang=\"en\">
<head>
  <meta charset=\"utf-8\" />
  <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
  <title>Chinese Flashcards</title>
  <style>
    :root {
      color-scheme: dark;
      font-family: 'Inter', -apple-system, BlinkMacSystemFont, 'Segoe UI', 'PingFang SC', sans-serif;
      background-color: #111827;
      color: #f9fafb;
    }
    body { margin: 0; padding: 1.5rem; }
    nav { display: flex; gap: 0.5rem; flex-wrap: wrap; margin-bottom: 1.5rem; }
    button {
      padding: 0.5rem 1rem;
      border-radius: 6px;
      border: none;
      font-weight: 600;
      background: #374151;
      color: #ffffff;
      cursor: pointer;
    }
    button.primary { background: #2563eb; }
    button:disabled { opacity: 0.5; cursor: not-allowed; }
    .card { background: #1f2937; border-radius: 16px; padding: 1.5rem; margin-bottom: 1rem; max-width: 56rem; }
    .hanzi { font-size: 2.75rem; text-align: center; }
    .sentence { font-size: 1.6rem; line-height: 1.6; }
    .row { display: flex; gap: 0.5rem; flex-wrap: wrap; align-items: center; }
    .tile { background: rgba(255, 255, 255, 0.1); padding: 0.25rem 0.6rem; border-radius: 6px; font-size: 1.4rem; }
    .tile.wrong { background: #facc15; color: #000000; }
    .ok { color: #4ade80; font-weight: 600; }
    .warn { color: #fde047; }
    .muted { opacity: 0.7; }
    section[hidden] { display: none; }
    label.set { display: flex; justify-content: space-between; background: #1f2937; padding: 0.5rem 1rem; border-radius: 6px; margin-bottom: 0.4rem; max-width: 28rem; }
  </style>
</head>
<body>
  <nav>
    <button class=\"primary\" data-screen=\"flashcards\">Start Practicing Words</button>
    <button data-screen=\"generator\">Random Sentence Generator</button>
    <button data-screen=\"builder\">Sentence Building</button>
    <button data-screen=\"sets\">Current Vocabulary Sets</button>
  </nav>

  <section id=\"flashcards\">
    <div class=\"card\">
      <div class=\"hanzi\" id=\"card-text\">—</div>
      <div class=\"muted\" id=\"card-back\" hidden></div>
    </div>
    <div class=\"row\">
      <button id=\"card-audio\">Audio</button>
      <button id=\"card-reveal\">Reveal</button>
      <button id=\"card-prev\">Prev</button>
      <button class=\"primary\" id=\"card-next\">Next</button>
    </div>
  </section>

  <section id=\"generator\" hidden>
    <div class=\"row\">
      <select id=\"gen-length\">
        <option value=\"short\">Short</option>
        <option value=\"regular\">Regular</option>
        <option value=\"long\">Long</option>
      </select>
      <button id=\"gen-new\">New Sentence</button>
      <button id=\"gen-audio\">Audio</button>
      <button id=\"gen-pinyin\">Show Pinyin</button>
      <button id=\"gen-english\">Show Translation</button>
    </div>
    <div class=\"card\">
      <div class=\"sentence\" id=\"gen-text\">—</div>
      <div class=\"muted\" id=\"gen-py\" hidden></div>
      <div id=\"gen-en\" hidden></div>
      <ul id=\"gen-hints\" hidden></ul>
    </div>
  </section>

  <section id=\"builder\" hidden>
    <p><span class=\"muted\">English:</span> <strong id=\"sb-prompt\"></strong></p>
    <div class=\"card\">
      <div class=\"muted\">Your sentence:</div>
      <div class=\"row\" id=\"sb-picked\"></div>
      <div id=\"sb-message\"></div>
    </div>
    <div class=\"row\" id=\"sb-choices\"></div>
    <p class=\"row\">
      <button id=\"sb-undo\">Undo</button>
      <button id=\"sb-reset\">Reset</button>
      <button id=\"sb-new\">New Sentence</button>
      <button id=\"sb-reveal\">Reveal Answer</button>
      <button id=\"sb-audio\">Audio</button>
    </p>
    <div class=\"card\"><strong>Grammar Notes</strong><ul id=\"sb-notes\"></ul></div>
  </section>

  <section id=\"sets\" hidden>
    <div id=\"set-list\"></div>
    <p class=\"muted\">Tip: Select multiple sets to feed Flashcards and the Sentence Generator.</p>
  </section>

  <script>
    const $ = (id) => document.getElementById(id);

    function speak(text) {
      try {
        const u = new SpeechSynthesisUtterance(text);
        const zh = speechSynthesis.getVoices().find(v => /zh|cmn|Chinese|Mandarin/i.test(v.lang + v.name));
        if (zh) u.voice = zh;
        u.rate = 0.95;
        speechSynthesis.cancel();
        speechSynthesis.speak(u);
      } catch (e) { /* speech is optional */ }
    }

    function fillList(el, items) {
      el.innerHTML = '';
      items.forEach(text => {
        const li = document.createElement('li');
        li.textContent = text;
        el.appendChild(li);
      });
    }

    async function getJSON(url, options) {
      const response = await fetch(url, options);
      return response.json();
    }

    const screens = {};
    document.querySelectorAll('nav button').forEach(btn => {
      btn.addEventListener('click', () => show(btn.dataset.screen));
    });
    function show(name) {
      document.querySelectorAll('section').forEach(s => { s.hidden = s.id !== name; });
      if (screens[name]) screens[name]();
    }

    /* Flashcards */
    const cards = { pool: [], idx: 0 };
    function renderCard() {
      const c = cards.pool[cards.idx];
      $('card-text').textContent = c ? c.text : 'No cards selected.';
      $('card-back').textContent = c ? `${c.pinyin} — ${c.english}` : '';
      $('card-back').hidden = true;
    }
    screens.flashcards = async () => {
      const data = await getJSON('/api/flashcards');
      cards.pool = data.ok ? data.cards : [];
      cards.idx = 0;
      renderCard();
    };
    $('card-reveal').onclick = () => { $('card-back').hidden = !$('card-back').hidden; };
    $('card-audio').onclick = () => { const c = cards.pool[cards.idx]; if (c) speak(c.text); };
    $('card-prev').onclick = () => { if (cards.pool.length) { cards.idx = (cards.idx - 1 + cards.pool.length) % cards.pool.length; renderCard(); } };
    $('card-next').onclick = () => { if (cards.pool.length) { cards.idx = (cards.idx + 1) % cards.pool.length; renderCard(); } };

    /* Sentence generator */
    let sentence = null;
    async function generate() {
      const data = await getJSON(`/api/sentence?length=${encodeURIComponent($('gen-length').value)}`);
      if (!data.ok) { $('gen-text').textContent = data.error; return; }
      sentence = data.sentence;
      $('gen-text').textContent = sentence.text;
      $('gen-py').textContent = sentence.pinyin;
      $('gen-en').textContent = sentence.english;
      fillList($('gen-hints'), sentence.hints);
      $('gen-py').hidden = true;
      $('gen-en').hidden = true;
      $('gen-hints').hidden = true;
    }
    screens.generator = generate;
    $('gen-length').onchange = generate;
    $('gen-new').onclick = generate;
    $('gen-audio').onclick = () => { if (sentence) speak(sentence.text); };
    $('gen-pinyin').onclick = () => { $('gen-py').hidden = !$('gen-py').hidden; };
    $('gen-english').onclick = () => {
      $('gen-en').hidden = !$('gen-en').hidden;
      $('gen-hints').hidden = $('gen-en').hidden;
    };

    /* Sentence building */
    const sb = { challenge: null, picked: [], choices: [], done: false };
    function renderBuilder(wrongIndex) {
      const picked = $('sb-picked');
      picked.innerHTML = '';
      sb.picked.forEach((tile, i) => {
        const span = document.createElement('span');
        span.className = i === wrongIndex ? 'tile wrong' : 'tile';
        span.textContent = tile.text;
        picked.appendChild(span);
      });
      const choices = $('sb-choices');
      choices.innerHTML = '';
      sb.choices.forEach(tile => {
        const btn = document.createElement('button');
        btn.textContent = tile.text;
        btn.onclick = () => pickTile(tile);
        choices.appendChild(btn);
      });
    }
    async function newChallenge() {
      const data = await getJSON('/api/builder');
      sb.challenge = data.challenge;
      sb.picked = [];
      sb.choices = data.challenge.tokens.slice();
      sb.done = false;
      $('sb-prompt').textContent = data.challenge.prompt;
      $('sb-message').textContent = '';
      fillList($('sb-notes'), data.challenge.notes);
      renderBuilder(null);
    }
    screens.builder = () => { if (!sb.challenge) newChallenge(); };
    async function pickTile(tile) {
      if (sb.done) return;
      sb.choices = sb.choices.filter(t => t.id !== tile.id);
      sb.picked.push(tile);
      renderBuilder(null);
      if (sb.picked.length < sb.challenge.token_count) return;
      const data = await getJSON('/api/builder/verify', {
        method: 'POST',
        headers: { 'Content-Type': 'application/json' },
        body: JSON.stringify({ challenge_id: sb.challenge.id, tokens: sb.picked.map(t => t.id) }),
      });
      if (!data.ok) { $('sb-message').textContent = data.error; return; }
      sb.done = data.correct;
      $('sb-message').className = data.correct ? 'ok' : 'warn';
      $('sb-message').textContent = data.message;
      fillList($('sb-notes'), data.notes || []);
      renderBuilder(data.correct ? null : data.first_mismatch_index);
      if (data.correct) speak(data.expected);
    }
    $('sb-undo').onclick = () => {
      if (sb.done || !sb.picked.length) return;
      sb.choices.push(sb.picked.pop());
      $('sb-message').textContent = '';
      fillList($('sb-notes'), sb.challenge.notes);
      renderBuilder(null);
    };
    $('sb-reset').onclick = () => {
      if (sb.done) return;
      sb.choices = sb.choices.concat(sb.picked);
      sb.picked = [];
      $('sb-message').textContent = '';
      fillList($('sb-notes'), sb.challenge.notes);
      renderBuilder(null);
    };
    $('sb-new').onclick = newChallenge;
    $('sb-audio').onclick = () => { if (sb.challenge) speak(sb.challenge.audio); };
    $('sb-reveal').onclick = async () => {
      const data = await getJSON('/api/builder/reveal', {
        method: 'POST',
        headers: { 'Content-Type': 'application/json' },
        body: JSON.stringify({ challenge_id: sb.challenge.id }),
      });
      if (!data.ok) return;
      const all = sb.picked.concat(sb.choices);
      sb.picked = data.order.map(id => all.find(t => t.id === id));
      sb.choices = [];
      sb.done = true;
      $('sb-message').className = 'ok';
      $('sb-message').textContent = data.expected;
      fillList($('sb-notes'), data.notes);
      renderBuilder(null);
    };

    /* Vocabulary sets */
    screens.sets = async () => {
      const data = await getJSON('/api/sets');
      const list = $('set-list');
      list.innerHTML = '';
      data.sets.forEach(s => {
        const label = document.createElement('label');
        label.className = 'set';
        const name = document.createElement('span');
        name.textContent = `${s.id} (${s.count})`;
        const box = document.createElement('input');
        box.type = 'checkbox';
        box.checked = s.selected;
        box.onchange = () => fetch('/api/sets', {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify({ toggle: s.id }),
        });
        label.appendChild(name);
        label.appendChild(box);
        list.appendChild(label);
      });
    };

    show('flashcards');
  </script>
</body>
</html>
"""


@app.get("/")
def index() -> Response:
    return Response(_INDEX_HTML, mimetype="text/html")


@app.get("/api/sets")
def list_sets():
    state = get_state()
    selected = set(state.selection_store.get())
    sets = [
        {
            "id": set_id,
            "count": len(state.vocabulary_sets.get(set_id, ())),
            "selected": set_id in selected,
        }
        for set_id in SET_IDS
    ]
    return jsonify({"ok": True, "sets": sets})


@app.post("/api/sets")
def update_sets():
    state = get_state()
    payload = _json_object()
    if payload is None:
        return jsonify({"ok": False, "error": "Invalid request payload."}), 400
    toggle = payload.get("toggle")
    selected = payload.get("selected")

    if isinstance(toggle, str):
        if toggle not in SET_IDS:
            return jsonify({"ok": False, "error": f"Unknown vocabulary set: {toggle}"}), 400
        toggle_selection(state.selection_store, toggle)
    elif isinstance(selected, list) and all(isinstance(item, str) for item in selected):
        unknown = [item for item in selected if item not in SET_IDS]
        if unknown:
            return jsonify({"ok": False, "error": f"Unknown vocabulary set: {unknown[0]}"}), 400
        state.selection_store.set(selected)
    else:
        return jsonify({"ok": False, "error": "Invalid request payload."}), 400

    logger.debug(f"Selection updated: {state.selection_store.get()}")
    return jsonify({"ok": True, "selected": state.selection_store.get()})


@app.get("/api/flashcards")
def flashcards():
    cards = [_entry_payload(entry) for entry in get_state().pool()]
    return jsonify({"ok": True, "cards": cards})


@app.get("/api/sentence")
def sentence():
    state = get_state()
    try:
        length = LengthClass.parse(request.args.get("length", LengthClass.SHORT.value))
    except GenerationError as exc:
        return jsonify({"ok": False, "error": str(exc)}), 400
    generated = state.generator.generate(state.pool(), length)
    return jsonify(
        {
            "ok": True,
            "sentence": {
                "length": length.value,
                "text": generated.text,
                "pinyin": generated.pinyin,
                "english": generated.english,
                "tokens": [
                    {**_entry_payload(token), "tag": token.tag.value} for token in generated.tokens
                ],
                "hints": grammar_hints(generated),
            },
        }
    )


@app.get("/api/builder")
def builder_challenge():
    challenge = get_state().challenges.create_challenge()
    return jsonify({"ok": True, "challenge": challenge})


@app.post("/api/builder/verify")
def builder_verify():
    payload = _json_object()
    if payload is None:
        return jsonify({"ok": False, "error": "Invalid request payload."}), 400
    challenge_id = payload.get("challenge_id")
    tokens = payload.get("tokens")

    if not isinstance(challenge_id, str) or not isinstance(tokens, list):
        return jsonify({"ok": False, "error": "Invalid request payload."}), 400

    selection: List[str] = []
    for token_id in tokens:
        if not isinstance(token_id, str):
            return jsonify({"ok": False, "error": "Token identifiers must be strings."}), 400
        selection.append(token_id)

    result = get_state().challenges.verify(challenge_id, selection)
    if result is None:
        return jsonify({"ok": False, "error": "Challenge expired or unknown."}), 404

    return jsonify({"ok": True, **result})


@app.post("/api/builder/reveal")
def builder_reveal():
    payload = _json_object()
    if payload is None:
        return jsonify({"ok": False, "error": "Invalid request payload."}), 400
    challenge_id = payload.get("challenge_id")
    if not isinstance(challenge_id, str):
        return jsonify({"ok": False, "error": "Invalid request payload."}), 400
    result = get_state().challenges.reveal(challenge_id)
    if result is None:
        return jsonify({"ok": False, "error": "Challenge expired or unknown."}), 404
    return jsonify({"ok": True, **result})


def run(host: str = "127.0.0.1", port: int = 8000, config: Optional[StudyConfig] = None) -> None:
    """Start the Flask development server."""

    configure(config)
    app.run(host=host, port=port, debug=False)


__all__ = [
    "ChallengeManager",
    "app",
    "configure",
    "run",
]
