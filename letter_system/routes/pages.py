# letter_system/routes/pages.py
from __future__ import annotations

import html
import json
from typing import Any, Iterable

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from letter_system.config import API_BASE_URL
from letter_system.services.vocabulary import (
    DETAIL_STATUSES,
    LETTER_TYPES,
    ROLE_HOME,
    SUBJECT_CODES,
)

router = APIRouter(tags=["pages"])

CHANNEL_NAME = "letters"


def esc(x: Any) -> str:
    return html.escape("" if x is None else str(x))


def _options(values: Iterable[tuple[str, str]], placeholder: str | None = None) -> str:
    opts = [f'<option value="">{esc(placeholder)}</option>'] if placeholder else []
    opts += [f'<option value="{esc(v)}">{esc(label)}</option>' for v, label in values]
    return "".join(opts)


def _client_config() -> str:
    cfg = {
        "apiBase": API_BASE_URL,
        "channel": CHANNEL_NAME,
        "roleHome": ROLE_HOME,
        "subjectCodes": list(SUBJECT_CODES),
        "letterTypes": LETTER_TYPES,
        "statuses": list(DETAIL_STATUSES),
    }
    # "</" must not close the script tag early
    return json.dumps(cfg).replace("</", "<\\/")


# Shared by every page: API helper and a tiny state store.
# Views subscribe to the store and get (state, action) on each dispatch.
COMMON_JS = """
const CONFIG = JSON.parse(document.getElementById("config").textContent);

async function apiFetch(path, options = {}) {
  const res = await fetch(CONFIG.apiBase + path, {
    headers: { "Content-Type": "application/json" },
    ...options,
  });
  let data = null;
  try { data = await res.json(); } catch (e) { data = null; }
  if (!res.ok) throw new Error((data && data.error) || res.statusText);
  return data;
}

function createStore(reducer, initial) {
  let state = initial;
  const subscribers = [];
  return {
    get: () => state,
    dispatch(action) {
      state = reducer(state, action);
      subscribers.forEach((fn) => fn(state, action));
    },
    subscribe(fn) { subscribers.push(fn); },
  };
}

function datePart(value) {
  return value ? String(value).split("T")[0] : "";
}

function cell(text) {
  const td = document.createElement("td");
  td.textContent = text === null || text === undefined || text === "" ? "-" : text;
  return td;
}

function showMessage(el, text, ok) {
  el.textContent = text;
  el.className = ok ? "msg ok" : "msg error";
}
"""


def _page(title: str, body: str, script: str) -> HTMLResponse:
    html_out = f"""<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <title>{esc(title)} · Letter System</title>
  <style>
    body {{ font-family: system-ui, -apple-system, Segoe UI, Roboto, Arial, sans-serif; margin: 16px; }}
    nav a {{ margin-right: 12px; color: inherit; }}
    .card {{ border: 1px solid #ddd; border-radius: 10px; padding: 12px; margin-top: 12px; }}
    h1,h2,h3 {{ margin: 0 0 8px 0; }}
    label {{ display: block; margin-top: 8px; font-size: 14px; }}
    input, select, textarea {{ padding: 4px 6px; font: inherit; }}
    form input, form select, form textarea {{ width: 100%; max-width: 420px; box-sizing: border-box; }}
    button {{ margin-top: 10px; padding: 6px 14px; }}
    table {{ width: 100%; border-collapse: collapse; margin-top: 8px; }}
    th, td {{ border-bottom: 1px solid #eee; padding: 6px 8px; text-align: left; font-size: 14px; }}
    th {{ background: #fafafa; }}
    .muted {{ color: #666; font-size: 13px; }}
    .msg.error {{ color: #b00020; }}
    .msg.ok {{ color: #1b7f3b; }}
    tr.saving {{ background: #fff8e1; }}
  </style>
</head>
<body>
  <nav class="muted">
    <a href="/login">Login</a><a href="/register">Register</a>
    <a href="/editor">Letter Submission</a><a href="/review">Daily Mail</a>
  </nav>
  {body}
  <script id="config" type="application/json">{_client_config()}</script>
  <script>{COMMON_JS}{script}</script>
</body>
</html>
"""
    return HTMLResponse(content=html_out, status_code=200)


LOGIN_JS = """
const form = document.getElementById("login-form");
const msg = document.getElementById("login-msg");

form.addEventListener("submit", async (e) => {
  e.preventDefault();
  const body = { username: form.username.value, password: form.password.value };
  if (!body.username || !body.password) return showMessage(msg, "All fields are required", false);
  try {
    const data = await apiFetch("/api/login", { method: "POST", body: JSON.stringify(body) });
    const target = CONFIG.roleHome[data.role];
    if (!target) return showMessage(msg, "Invalid role assigned", false);
    window.location.href = target;
  } catch (err) {
    showMessage(msg, err.message || "Login failed", false);
  }
});
"""


@router.get("/login", response_class=HTMLResponse, include_in_schema=False)
def login_page() -> HTMLResponse:
    body = """
  <div class="card">
    <h1>Login</h1>
    <div id="login-msg" class="msg"></div>
    <form id="login-form">
      <label>Username <input type="text" name="username" placeholder="Enter username" /></label>
      <label>Password <input type="password" name="password" placeholder="Enter password" /></label>
      <button type="submit">Login</button>
    </form>
    <p class="muted">Don't have an account? <a href="/register">Register here</a></p>
  </div>
"""
    return _page("Login", body, LOGIN_JS)


REGISTER_JS = """
const form = document.getElementById("register-form");
const msg = document.getElementById("register-msg");

form.addEventListener("submit", async (e) => {
  e.preventDefault();
  const username = form.username.value;
  const password = form.password.value;
  if (!username || !password || !form.confirm.value) return showMessage(msg, "All fields are required.", false);
  if (password !== form.confirm.value) return showMessage(msg, "Passwords do not match.", false);
  try {
    const data = await apiFetch("/api/register", {
      method: "POST",
      body: JSON.stringify({ username, password, role: form.role.value }),
    });
    showMessage(msg, data.message || "Registration successful!", true);
    form.reset();
  } catch (err) {
    showMessage(msg, err.message || "Something went wrong.", false);
  }
});
"""


@router.get("/register", response_class=HTMLResponse, include_in_schema=False)
def register_page() -> HTMLResponse:
    # first option is the default
    roles = _options([(r, r.capitalize()) for r in ("user", "admin")])
    body = f"""
  <div class="card">
    <h1>Register</h1>
    <div id="register-msg" class="msg"></div>
    <form id="register-form">
      <label>Username <input type="text" name="username" placeholder="Enter username" /></label>
      <label>Password <input type="password" name="password" placeholder="Enter password" /></label>
      <label>Confirm Password <input type="password" name="confirm" placeholder="Confirm password" /></label>
      <label>Role <select name="role">{roles}</select></label>
      <button type="submit">Register</button>
    </form>
    <p class="muted">Already registered? <a href="/login">Login</a></p>
  </div>
"""
    return _page("Register", body, REGISTER_JS)


EDITOR_JS = """
const FIELDS = ["letter_date", "address", "details", "subject_no", "letter_type", "sent_date"];
const emptyForm = () => Object.fromEntries(FIELDS.map((f) => [f, ""]));

function editorReducer(state, action) {
  switch (action.type) {
    case "field": return { ...state, form: { ...state.form, [action.name]: action.value } };
    case "reset-form": return { ...state, form: emptyForm() };
    case "loaded": return { ...state, letters: action.letters, loading: false, error: "" };
    case "failed": return { ...state, loading: false, error: action.error };
    default: return state;
  }
}

const store = createStore(editorReducer, { form: emptyForm(), letters: [], loading: true, error: "" });
const form = document.getElementById("letter-form");
const msg = document.getElementById("editor-msg");
const tbody = document.getElementById("summary-body");

function renderForm(state) {
  FIELDS.forEach((f) => { form.elements[f].value = state.form[f]; });
}

function renderTable(state) {
  tbody.replaceChildren();
  if (state.loading || state.error || state.letters.length === 0) {
    const tr = document.createElement("tr");
    const td = cell(state.loading ? "Loading..." : state.error || "No letters yet");
    td.colSpan = 6;
    tr.appendChild(td);
    tbody.appendChild(tr);
    return;
  }
  state.letters.forEach((l) => {
    const tr = document.createElement("tr");
    [l.subject_no, datePart(l.letter_date), l.details, datePart(l.sent_date), l.address, l.letter_type]
      .forEach((v) => tr.appendChild(cell(v)));
    tbody.appendChild(tr);
  });
}

store.subscribe((state, action) => {
  if (action.type === "reset-form") renderForm(state);
  if (action.type === "loaded" || action.type === "failed") renderTable(state);
});

async function fetchLetters() {
  try {
    store.dispatch({ type: "loaded", letters: await apiFetch("/api/letters") });
  } catch (err) {
    store.dispatch({ type: "failed", error: "Error fetching letters" });
  }
}

FIELDS.forEach((f) => {
  form.elements[f].addEventListener("input", (e) => store.dispatch({ type: "field", name: f, value: e.target.value }));
});

form.addEventListener("submit", async (e) => {
  e.preventDefault();
  try {
    await apiFetch("/api/letters", { method: "POST", body: JSON.stringify(store.get().form) });
    showMessage(msg, "Letter submitted", true);
    store.dispatch({ type: "reset-form" });
    fetchLetters();
  } catch (err) {
    showMessage(msg, "Failed: " + err.message, false);
  }
});

// the review page posts here after "Submit All"
const channel = new BroadcastChannel(CONFIG.channel);
channel.onmessage = (e) => {
  if (e.data && e.data.type === "letters-invalidated") fetchLetters();
};

renderTable(store.get());
fetchLetters();
"""


@router.get("/editor", response_class=HTMLResponse, include_in_schema=False)
def editor_page() -> HTMLResponse:
    subjects = _options([(c, c) for c in SUBJECT_CODES], "-- Select Subject No --")
    types = _options(LETTER_TYPES.items(), "-- Select --")
    body = f"""
  <div class="card">
    <h1>Letter Submission</h1>
    <div id="editor-msg" class="msg"></div>
    <form id="letter-form">
      <label>Letter date <input type="date" name="letter_date" required /></label>
      <label>Address <input type="text" name="address" required /></label>
      <label>Details <textarea name="details" rows="3" required></textarea></label>
      <label>Subject No <select name="subject_no" required>{subjects}</select></label>
      <label>Letter Type <select name="letter_type" required>{types}</select></label>
      <label>Sent date <input type="date" name="sent_date" /></label>
      <button type="submit">Submit</button>
    </form>
  </div>
  <div class="card">
    <h2>Letters Summary</h2>
    <table>
      <thead><tr>
        <th>Subject No</th><th>Received</th><th>Response</th>
        <th>Sent</th><th>Sent to</th><th>Letter Type</th>
      </tr></thead>
      <tbody id="summary-body"></tbody>
    </table>
  </div>
"""
    return _page("Letter Submission", body, EDITOR_JS)


REVIEW_JS = """
const SEARCH_KEYS = ["subject_no", "details", "letter_type", "address"];

function matches(letter, term) {
  if (!term) return true;
  const t = term.toLowerCase();
  return SEARCH_KEYS.some((k) => (letter[k] || "").toLowerCase().includes(t))
    || datePart(letter.letter_date).includes(t)
    || datePart(letter.sent_date).includes(t);
}

function reviewReducer(state, action) {
  switch (action.type) {
    case "loaded": return { ...state, letters: action.letters, loading: false, error: "" };
    case "failed": return { ...state, loading: false, error: action.error };
    case "query": return { ...state, query: action.query };
    case "edit": return {
      ...state,
      letters: state.letters.map((l) => (l.id === action.id ? { ...l, [action.field]: action.value } : l)),
    };
    case "saving": return { ...state, savingId: action.id };
    default: return state;
  }
}

const store = createStore(reviewReducer, { letters: [], query: "", loading: true, error: "", savingId: null });
const tbody = document.getElementById("review-body");
const search = document.getElementById("search");
const submitBtn = document.getElementById("submit-all");
const channel = new BroadcastChannel(CONFIG.channel);

function editor(letter, field, el) {
  el.className = "row-input";
  el.value = field.endsWith("_date") ? datePart(letter[field]) : letter[field] || "";
  el.addEventListener("input", (e) => store.dispatch({ type: "edit", id: letter.id, field, value: e.target.value }));
  const td = document.createElement("td");
  td.appendChild(el);
  return td;
}

function dateInput() {
  const el = document.createElement("input");
  el.type = "date";
  return el;
}

function statusSelect(current) {
  const el = document.createElement("select");
  ["", ...CONFIG.statuses].forEach((s) => el.add(new Option(s || "-- Select --", s)));
  // keep free-text values entered through the editor
  if (current && !CONFIG.statuses.includes(current)) el.add(new Option(current, current));
  return el;
}

function renderTable(state) {
  tbody.replaceChildren();
  const rows = state.letters.filter((l) => matches(l, state.query));
  if (state.loading || state.error || rows.length === 0) {
    const tr = document.createElement("tr");
    const td = cell(state.loading ? "Loading letters..." : state.error || "No letters found.");
    td.colSpan = 6;
    tr.appendChild(td);
    tbody.appendChild(tr);
    return;
  }
  rows.forEach((l) => {
    const tr = document.createElement("tr");
    tr.dataset.id = l.id;
    const address = document.createElement("input");
    address.type = "text";
    tr.append(
      cell(l.subject_no),
      editor(l, "letter_date", dateInput()),
      editor(l, "details", statusSelect(l.details)),
      editor(l, "sent_date", dateInput()),
      editor(l, "address", address),
      cell(l.letter_type),
    );
    tbody.appendChild(tr);
  });
}

function renderSaving(state) {
  tbody.querySelectorAll("tr").forEach((tr) => {
    tr.classList.toggle("saving", String(state.savingId) === tr.dataset.id);
  });
  submitBtn.disabled = state.savingId !== null;
}

store.subscribe((state, action) => {
  if (["loaded", "failed", "query"].includes(action.type)) renderTable(state);
  if (action.type === "saving") renderSaving(state);
});

const toTimestamp = (value) => (value ? new Date(value).toISOString() : null);

// One PUT per row, in order. A failure stops the loop; rows already
// sent stay updated.
async function submitAll() {
  try {
    for (const letter of store.get().letters) {
      store.dispatch({ type: "saving", id: letter.id });
      const payload = {
        ...letter,
        letter_date: toTimestamp(letter.letter_date),
        sent_date: toTimestamp(letter.sent_date),
      };
      await apiFetch(`/api/letters/${letter.id}`, { method: "PUT", body: JSON.stringify(payload) });
    }
    channel.postMessage({ type: "letters-invalidated" });
    alert("All letters updated successfully!");
  } catch (err) {
    console.error("Failed to save all:", err);
    alert("Failed to save all changes: " + err.message);
  } finally {
    store.dispatch({ type: "saving", id: null });
  }
}

search.addEventListener("input", (e) => store.dispatch({ type: "query", query: e.target.value }));
submitBtn.addEventListener("click", submitAll);

renderTable(store.get());
apiFetch("/api/letters")
  .then((letters) => store.dispatch({ type: "loaded", letters }))
  .catch(() => store.dispatch({ type: "failed", error: "Error fetching letters" }));
"""


@router.get("/review", response_class=HTMLResponse, include_in_schema=False)
def review_page() -> HTMLResponse:
    body = """
  <div class="card">
    <h1>Daily Mail</h1>
    <input id="search" type="text" placeholder="Search all letters..." />
    <table class="letters-table">
      <thead><tr>
        <th>Subject No</th><th>Received</th><th>Response</th>
        <th>Sent</th><th>Sent to</th><th>Letter Type</th>
      </tr></thead>
      <tbody id="review-body"></tbody>
    </table>
    <button id="submit-all">Submit All</button>
  </div>
"""
    return _page("Daily Mail", body, REVIEW_JS)
