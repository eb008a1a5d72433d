"""
app.py
Streamlit bookkeeping app for the Kalipur Paharadar welfare fund.
Run: streamlit run app.py
"""

from __future__ import annotations

import logging
from datetime import date

import pandas as pd
import streamlit as st
import streamlit.components.v1 as components

import ai_service
import auth
import config
import db
import image_host
import ledger
import reports
import store
from models import (
    COLLECTORS,
    COUNTRY_OPTIONS,
    DEFAULT_COUNTRY,
    EXPENSE_CATEGORIES,
    MEMBER_STATUSES,
    PRESET_ITEMS,
)
from notifications import ChangeWatcher, NotificationQueue
from utils import ALL_MONTHS, available_months, bengali_month_name, default_month, format_taka, short_month_name

config.configure_logging()
logger = logging.getLogger(__name__)

st.set_page_config(page_title="কালিপুর পাহারাদার", layout="wide")

PAGES = ["Dashboard", "Members", "Collections", "Defaulters", "Expenses", "Reports", "Trash", "Settings"]
PAGE_LABELS = {
    "Dashboard": "ড্যাশবোর্ড",
    "Members": "সদস্য",
    "Collections": "আদায়",
    "Defaulters": "বকেয়া তালিকা",
    "Expenses": "খরচ",
    "Reports": "রিপোর্ট",
    "Trash": "রিসাইকেল বিন",
    "Settings": "সেটিংস",
}
# query param holding the last active view
VIEW_PARAM = "view"
NOTE_ICONS = {"success": "✅", "info": "ℹ️", "warning": "⚠️", "alert": "🚨"}


def init_once():
    db.init_db(config.ADMIN_EMAIL, auth.hash_password(config.ADMIN_DEFAULT_PASSWORD))


def init_session():
    if "user" not in st.session_state:
        st.session_state.user = None
    if "page" not in st.session_state:
        saved = st.query_params.get(VIEW_PARAM, "Dashboard")
        st.session_state.page = saved if saved in PAGES else "Dashboard"
    if "cache" not in st.session_state:
        queue = NotificationQueue()
        st.session_state.cache = {}
        st.session_state.notes = queue
        st.session_state.watcher = ChangeWatcher(queue)


def session_listeners() -> dict:
    """Callbacks that keep this session's cache and notifications current."""
    cache = st.session_state.cache
    watcher = st.session_state.watcher

    def keep(name, then=None):
        def callback(rows):
            cache[name] = rows
            if then:
                then(rows)
        return callback

    return {
        store.MEMBERS: keep(store.MEMBERS, watcher.on_members),
        store.SUBSCRIPTIONS: keep(store.SUBSCRIPTIONS, watcher.on_subscriptions),
        store.EXPENSES: keep(store.EXPENSES, watcher.on_expenses),
        store.TRASH: keep(store.TRASH),
    }


def is_admin() -> bool:
    return st.session_state.user is not None


def data():
    cache = st.session_state.cache
    return cache[store.MEMBERS], cache[store.SUBSCRIPTIONS], cache[store.EXPENSES]


def go_to(page: str):
    st.session_state.page = page
    st.query_params[VIEW_PARAM] = page


def month_select(label: str, key: str, include_all: bool = False) -> str:
    options = ([ALL_MONTHS] if include_all else []) + available_months()
    default = ALL_MONTHS if include_all else default_month()
    return st.selectbox(label, options, index=options.index(default), format_func=bengali_month_name, key=key)


def print_html(body: str, height: int = 0):
    components.html(reports.print_page(body), height=height, scrolling=bool(height))


# ---------- Auth ----------

def login_box():
    with st.sidebar.expander("🔐 অ্যাডমিন লগইন", expanded=False):
        username = st.text_input("ইউজারনেম", key="login_user")
        password = st.text_input("পাসওয়ার্ড", type="password", key="login_pass")
        if st.button("লগইন করুন", type="primary"):
            try:
                st.session_state.user = auth.login(username, password)
            except auth.AuthError as e:
                st.error(str(e))
                return
            st.session_state.notes.push("success", "লগইন সফল", "অ্যাডমিন প্যানেলে স্বাগতম")
            st.rerun()


def logout():
    logger.info("Admin %s signed out", st.session_state.user)
    st.session_state.user = None
    go_to("Dashboard")
    st.session_state.notes.push("info", "লগআউট", "আপনি সফলভাবে লগআউট করেছেন")


def force_change_password_screen():
    st.title("⚠️ পাসওয়ার্ড পরিবর্তন করুন")
    st.warning("ডিফল্ট পাসওয়ার্ড পরিবর্তন না করে অ্যাডমিন প্যানেল ব্যবহার করা যাবে না।")
    password_form()


def password_form():
    new1 = st.text_input("নতুন পাসওয়ার্ড", type="password").strip()
    new2 = st.text_input("আবার লিখুন", type="password").strip()
    if st.button("পাসওয়ার্ড আপডেট", type="primary"):
        if len(new1) < 6:
            st.error("পাসওয়ার্ড অন্তত ৬ অক্ষরের হতে হবে।")
            return
        if new1 != new2:
            st.error("পাসওয়ার্ড মিলছে না।")
            return
        auth.change_password(st.session_state.user, new1)
        st.success("পাসওয়ার্ড আপডেট হয়েছে।")
        st.rerun()


# ---------- Notifications ----------

def notification_area():
    for note in st.session_state.notes.visible():
        with st.container(border=True):
            c1, c2, c3 = st.columns([6, 1, 1])
            c1.markdown(f"{NOTE_ICONS.get(note.type, 'ℹ️')} **{note.title}** | {note.message}")
            if note.action_view and c2.button("চলো দেখি", key=f"go_{note.id}"):
                st.session_state.notes.dismiss(note.id)
                go_to(note.action_view)
                st.rerun()
            if c3.button("✕", key=f"dismiss_{note.id}"):
                st.session_state.notes.dismiss(note.id)
                st.rerun()


# ---------- Pages ----------

@st.cache_data(ttl=600, show_spinner=False)
def cached_insight(member_count: int, balance: float, recent: tuple) -> str:
    return ai_service.financial_insight(member_count, balance, [{"d": d, "a": a} for d, a in recent])


def dashboard_page():
    st.header("📊 ড্যাশবোর্ড")
    members, subs, exps = data()

    total_in = ledger.total_collections(subs)
    total_out = ledger.total_expenses(exps)
    balance = total_in - total_out

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("মোট সদস্য", len(members))
    c2.metric("মোট আদায়", format_taka(total_in))
    c3.metric("মোট খরচ", format_taka(total_out))
    c4.metric("তহবিল ব্যালেন্স", format_taka(balance))

    if members:
        recent = tuple((e.description, e.amount) for e in exps[:5])
        with st.spinner("AI বিশ্লেষণ চলছে..."):
            st.info(f"✨ {cached_insight(len(members), balance, recent)}")

    if is_admin():
        a1, a2, a3 = st.columns(3)
        if a1.button("➕ নতুন সদস্য"):
            go_to("Members")
            st.rerun()
        if a2.button("💰 চাঁদা আদায়"):
            go_to("Collections")
            st.rerun()
        if a3.button("🧾 নতুন খরচ"):
            go_to("Expenses")
            st.rerun()

    st.divider()

    st.subheader("গত ৬ মাসের আদায় ও খরচ")
    series = pd.DataFrame(ledger.monthly_series(subs, exps))
    series["month"] = series["month"].map(short_month_name)
    st.bar_chart(series.rename(columns={"collections": "আদায়", "expenses": "খরচ"}).set_index("month"))

    st.subheader("সাম্প্রতিক লেনদেন")
    rows = ledger.recent_transactions(subs, exps)
    if rows:
        df = pd.DataFrame(rows)
        df["member"] = [reports.member_lookup(members, m)["name"] if m else "" for m in df["member_id"]]
        df["amount"] = [format_taka(a) if t == "income" else f"-{format_taka(a)}" for t, a in zip(df["type"], df["amount"])]
        st.dataframe(df[["date", "type", "member", "description", "amount"]], use_container_width=True, hide_index=True)
    else:
        st.caption("এখনও কোনো লেনদেন নেই।")


def member_form(existing=None):
    if existing:
        st.subheader(f"✏️ সদস্য সম্পাদনা: {existing.name}")
    else:
        st.subheader("➕ নতুন সদস্য")

    key = existing.id if existing else "new"
    photo_key = f"photo_{key}"
    if photo_key not in st.session_state:
        st.session_state[photo_key] = existing.photo_url if existing else ""

    col1, col2 = st.columns(2)
    with col1:
        name = st.text_input("নাম", value=existing.name if existing else "", key=f"name_{key}")
        house = st.text_input("বাড়ির নাম", value=existing.house_name if existing else "", key=f"house_{key}")
        mobile = st.text_input("মোবাইল (ঐচ্ছিক)", value=existing.mobile if existing else "", key=f"mobile_{key}")
    with col2:
        country_value = existing.country if existing else DEFAULT_COUNTRY
        countries = COUNTRY_OPTIONS if country_value in COUNTRY_OPTIONS else COUNTRY_OPTIONS + [country_value]
        country = st.selectbox("দেশ", countries, index=countries.index(country_value), key=f"country_{key}")
        status = st.selectbox(
            "স্ট্যাটাস",
            MEMBER_STATUSES,
            index=MEMBER_STATUSES.index(existing.status) if existing else 0,
            key=f"status_{key}",
        )
        upload = st.file_uploader("ছবি (৫ MB পর্যন্ত)", type=["png", "jpg", "jpeg", "webp"], key=f"upload_{key}")
        if upload is not None and st.button("ছবি আপলোড", key=f"do_upload_{key}"):
            try:
                st.session_state[photo_key] = image_host.upload_image(upload.getvalue(), upload.name)
            except image_host.UploadError as e:
                st.error(str(e))
        if st.session_state[photo_key]:
            st.image(st.session_state[photo_key], width=96)
            if st.button("ছবি সরান", key=f"rm_photo_{key}"):
                st.session_state[photo_key] = ""
                st.rerun()

    if st.button("সেভ করুন", type="primary", key=f"save_{key}"):
        try:
            store.save_member(
                name, house, mobile, country, status, st.session_state[photo_key],
                member_id=existing.id if existing else None,
            )
        except store.ValidationError as e:
            st.error(str(e))
            return
        except store.StoreError as e:
            st.error(f"তথ্য সেভ করতে সমস্যা হয়েছে: {e}")
            return
        st.session_state.pop(photo_key, None)
        st.session_state.edit_member_id = None
        st.success("সদস্যের তথ্য সেভ হয়েছে।")
        st.rerun()


def members_page():
    st.header("👥 সদস্য")
    members, subs, _ = data()

    with st.sidebar:
        st.subheader("খুঁজুন ও ফিল্টার")
        search = st.text_input("নাম / বাড়ি")
        status_filter = st.selectbox("পরিশোধ", ["all", "paid", "unpaid"],
                                     format_func={"all": "সকল", "paid": "পরিশোধিত", "unpaid": "বকেয়া"}.get)
    month = month_select("মাস", key="members_month")

    rows = []
    for m in store.search_members(ledger.active_members(members), search):
        paid = ledger.is_paid(subs, m.id, month)
        if status_filter == "paid" and not paid or status_filter == "unpaid" and paid:
            continue
        rows.append({
            "id": m.id, "ছবি": m.photo_url, "নাম": m.name, "বাড়ি": m.house_name, "মোবাইল": m.mobile,
            "দেশ": m.country, "পরিশোধ": reports.PAID_LABEL if paid else reports.DUE_LABEL,
            "মোট অনুদান": format_taka(ledger.member_total(subs, m.id)),
        })
    df = pd.DataFrame(rows, columns=["id", "ছবি", "নাম", "বাড়ি", "মোবাইল", "দেশ", "পরিশোধ", "মোট অনুদান"])
    st.dataframe(df.drop(columns=["id"]), use_container_width=True, hide_index=True,
                 column_config={"ছবি": st.column_config.ImageColumn(width="small")})
    if st.button("🖨️ তালিকা প্রিন্ট"):
        report = reports.build_report(reports.MEMBER_LIST, month, members, subs, [])
        print_html(reports.render_print_html(report))

    inactive = [m for m in members if m.status != "active"]
    if inactive:
        with st.expander(f"নিষ্ক্রিয় সদস্য ({len(inactive)})"):
            st.dataframe(pd.DataFrame([{"নাম": m.name, "বাড়ি": m.house_name} for m in inactive]), hide_index=True)

    if not is_admin():
        st.caption("ভিউ অনলি মোড: পরিবর্তনের জন্য লগইন করুন।")
        return

    st.divider()

    colA, colB = st.columns([1, 2])
    with colA:
        labels = {m.id: f"{m.name} ({m.house_name})" for m in members}
        selected_id = st.selectbox("সদস্য নির্বাচন", ["(none)"] + list(labels), format_func=lambda i: labels.get(i, i))
    with colB:
        if selected_id != "(none)":
            c1, c2 = st.columns(2)
            if c1.button("সম্পাদনা"):
                st.session_state.edit_member_id = selected_id
                st.rerun()
            if c2.button("চাঁদা যোগ করুন"):
                st.session_state.collect_member_id = selected_id
                go_to("Collections")
                st.rerun()

    st.divider()

    existing = store.get_member(members, st.session_state.get("edit_member_id"))
    if existing:
        member_form(existing=existing)
        if st.button("বাতিল"):
            st.session_state.edit_member_id = None
            st.rerun()
    else:
        member_form(existing=None)


def receipt_card(sub, members):
    who = reports.member_lookup(members, sub.member_id)
    with st.container(border=True):
        st.markdown(f"### 🧾 রসিদ {sub.receipt_no}")
        c1, c2 = st.columns([1, 3])
        c1.image(who["photo_url"], width=96)
        c2.markdown(
            f"**{who['name']}** | বাড়ি: {who['house_name']}\n\n"
            f"মাস: {bengali_month_name(sub.month)} | পরিমাণ: **{format_taka(sub.amount)}** | গ্রহণকারী: {sub.received_by}"
        )
        st.caption(f"❝ {st.session_state.get('receipt_quote', '')} ❞")
        if st.button("রসিদ বন্ধ করুন"):
            st.session_state.last_receipt = None
            st.rerun()


def collections_page():
    st.header("💰 চাঁদা আদায়")
    members, subs, _ = data()

    if st.session_state.get("last_receipt"):
        receipt_card(st.session_state.last_receipt, members)

    if is_admin():
        active = ledger.active_members(members)
        if not active:
            st.info("এখনও কোনো সক্রিয় সদস্য নেই।")
        else:
            st.subheader("নতুন চাঁদা জমা")
            labels = {m.id: f"{m.name} ({m.house_name})" for m in active}
            ids = list(labels)
            preselected = st.session_state.get("collect_member_id")
            c1, c2, c3, c4 = st.columns([2, 1, 1, 1])
            with c1:
                member_id = st.selectbox("সদস্য", ids, index=ids.index(preselected) if preselected in ids else 0,
                                         format_func=labels.get)
            with c2:
                entry_month = month_select("মাস", key="entry_month")
            with c3:
                amount = st.number_input("পরিমাণ (৳)", min_value=0.0, step=50.0, value=0.0)
            with c4:
                received_by = st.selectbox("গ্রহণকারী", COLLECTORS)

            if ledger.is_paid(subs, member_id, entry_month):
                st.warning("এই মাসের চাঁদা আগেই জমা হয়েছে; আবার জমা দিলে আগের তথ্য প্রতিস্থাপিত হবে।")

            if st.button("জমা করুন", type="primary"):
                try:
                    sub = store.record_subscription(member_id, entry_month, amount, received_by)
                except store.ValidationError as e:
                    st.error(str(e))
                except store.StoreError:
                    st.error("জমা করতে সমস্যা হয়েছে।")
                else:
                    st.session_state.receipt_quote = ai_service.motivational_quote(labels[member_id])
                    st.session_state.last_receipt = sub
                    st.session_state.collect_member_id = None
                    st.session_state.notes.push("success", "সফল", "চাঁদা সফলভাবে জমা করা হয়েছে।")
                    st.rerun()
        st.divider()

    st.subheader("আদায়ের তালিকা")
    filter_month = month_select("মাস ফিল্টার", key="collections_filter", include_all=True)
    rows = ledger.subscriptions_for_month(subs, filter_month)
    st.metric(f"{bengali_month_name(filter_month)} | মোট আদায়", format_taka(ledger.total_collections(rows)))
    table = reports.collection_rows(members, rows)
    if table:
        df = pd.DataFrame(table)[["receipt_no", "name", "house_name", "month", "date", "received_by", "amount"]]
        df["month"] = df["month"].map(bengali_month_name)
        df["amount"] = df["amount"].map(format_taka)
        st.dataframe(df, use_container_width=True, hide_index=True)
        if st.button("🖨️ তালিকা প্রিন্ট"):
            report = reports.build_report(reports.COLLECTIONS, filter_month, members, subs, [])
            print_html(reports.render_print_html(report))
    else:
        st.caption("এই মাসে কোনো আদায় নেই।")


def defaulters_page():
    st.header("⏰ বকেয়া তালিকা")
    members, subs, _ = data()
    month = month_select("মাস", key="defaulters_month")

    paid, active = ledger.paid_ratio(members, subs, month)
    st.metric("পরিশোধের হার", f"{paid} / {active}")

    rows = ledger.defaulters(members, subs, month)
    if not rows:
        st.success("এই মাসে সবাই চাঁদা দিয়েছেন।")
        return
    st.dataframe(
        pd.DataFrame([{"নাম": m.name, "বাড়ি": m.house_name, "মোবাইল": m.mobile, "দেশ": m.country} for m in rows]),
        use_container_width=True, hide_index=True,
    )
    if is_admin():
        labels = {m.id: m.name for m in rows}
        chosen = st.selectbox("চাঁদা নিন", list(labels), format_func=labels.get)
        if st.button("আদায় পাতায় যান"):
            st.session_state.collect_member_id = chosen
            go_to("Collections")
            st.rerun()


def expense_form(existing=None):
    key = existing.id if existing else "new"
    st.subheader("✏️ খরচ সম্পাদনা" if existing else "➕ নতুন খরচ")

    cats = list(EXPENSE_CATEGORIES)
    c1, c2, c3 = st.columns([1, 2, 1])
    with c1:
        category = st.selectbox("খাত", cats, index=cats.index(existing.category) if existing and existing.category in cats else cats.index("Others"),
                                format_func=EXPENSE_CATEGORIES.get, key=f"cat_{key}")
    with c2:
        description = st.text_input("বিবরণ", value=existing.description if existing else "", key=f"desc_{key}")
    with c3:
        exp_date = st.date_input("তারিখ", value=date.fromisoformat(existing.date) if existing else date.today(), key=f"date_{key}")

    if existing:
        items = [{"name": i.name, "amount": i.amount} for i in existing.items]
    else:
        items = [{"name": n, "amount": 0.0} for n in PRESET_ITEMS.get(category, [""])]
    edited = st.data_editor(
        pd.DataFrame(items, columns=["name", "amount"]),
        num_rows="dynamic",
        use_container_width=True,
        key=f"items_{key}_{category}",
        column_config={
            "name": st.column_config.TextColumn("আইটেম"),
            "amount": st.column_config.NumberColumn("পরিমাণ (৳)", min_value=0.0),
        },
    )
    rows = edited.fillna({"name": "", "amount": 0}).to_dict("records")
    st.markdown(f"**মোট: {format_taka(sum(i.amount for i in store.clean_items(rows)))}**")

    if st.button("সেভ করুন", type="primary", key=f"save_exp_{key}"):
        try:
            store.save_expense(category, description, exp_date.isoformat(), rows, expense_id=existing.id if existing else None)
        except store.ValidationError as e:
            st.error(str(e))
            return
        except store.StoreError:
            st.error("সেভ করতে সমস্যা হয়েছে।")
            return
        st.session_state.edit_expense_id = None
        msg = "খরচের তথ্য আপডেট করা হয়েছে।" if existing else "নতুন খরচ যোগ করা হয়েছে।"
        st.session_state.notes.push("success", "সফল", msg)
        st.rerun()


def expenses_page():
    st.header("🧾 খরচ")
    _, _, exps = data()

    month = month_select("মাস", key="expenses_month", include_all=True)
    rows = ledger.expenses_for_month(exps, month)
    st.metric(f"{bengali_month_name(month)} | মোট খরচ", format_taka(ledger.total_expenses(rows)))

    for e in rows:
        label = f"{e.date} · {EXPENSE_CATEGORIES.get(e.category, e.category)} · {e.description} · {format_taka(e.amount)}"
        with st.expander(label):
            if e.items:
                st.table(pd.DataFrame([{"আইটেম": i.name, "পরিমাণ": format_taka(i.amount)} for i in e.items]))
            if is_admin():
                c1, c2, c3 = st.columns(3)
                if c1.button("সম্পাদনা", key=f"edit_{e.id}"):
                    st.session_state.edit_expense_id = e.id
                    st.rerun()
                confirm = c2.checkbox("নিশ্চিত", key=f"confirm_{e.id}")
                if c3.button("মুছে ফেলুন", key=f"del_{e.id}", disabled=not confirm):
                    try:
                        store.delete_expense(e)
                    except store.StoreError:
                        st.error("মুছে ফেলতে সমস্যা হয়েছে।")
                    else:
                        st.session_state.notes.push("warning", "ডিলিট সম্পন্ন", "রেকর্ডটি রিসাইকেল বিনে পাঠানো হয়েছে।")
                        st.rerun()
    if not rows:
        st.caption("কোনো খরচ নেই।")

    if not is_admin():
        return
    st.divider()
    existing = next((e for e in exps if e.id == st.session_state.get("edit_expense_id")), None)
    expense_form(existing)
    if existing and st.button("বাতিল"):
        st.session_state.edit_expense_id = None
        st.rerun()


def reports_page():
    st.header("📑 রিপোর্ট")
    members, subs, exps = data()
    month = month_select("রিপোর্টের মাস নির্বাচন", key="report_month")

    total_in = ledger.month_collections(subs, month)
    total_out = ledger.month_expenses(exps, month)
    paid, active = ledger.paid_ratio(members, subs, month)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("মাসের আদায়", format_taka(total_in))
    c2.metric("মাসের খরচ", format_taka(total_out))
    c3.metric("মাসের ব্যালেন্স", format_taka(total_in - total_out))
    c4.metric("পরিশোধের হার", f"{paid} / {active}")

    st.subheader("প্রিন্ট")
    cols = st.columns(len(reports.REPORT_MODES))
    for col, (mode, title) in zip(cols, reports.REPORT_MODES.items()):
        if col.button(title, key=f"print_{mode}"):
            st.session_state.print_mode = mode

    mode = st.session_state.get("print_mode")
    if mode:
        report = reports.build_report(mode, month, members, subs, exps)
        print_html(reports.render_print_html(report), height=600)
        st.session_state.print_mode = None

    st.divider()
    st.subheader(f"সদস্যদের পরিশোধ অবস্থা | {bengali_month_name(month)}")
    status = reports.build_report(reports.MEMBER_LIST, month, members, subs, exps)
    st.caption(f"{active - paid} বকেয়া")
    st.dataframe(reports.report_frame(status.rows, reports.MEMBER_LIST), use_container_width=True)


def trash_page():
    st.header("🗑️ রিসাইকেল বিন")
    records = st.session_state.cache[store.TRASH]
    if not records:
        st.caption("রিসাইকেল বিন খালি।")
        return
    df = pd.DataFrame([
        {
            "ধরন": "খরচ" if r.type == "expense" else "সদস্য",
            "বিবরণ": r.data.get("description") or r.data.get("name", ""),
            "পরিমাণ": format_taka(r.data.get("amount", 0)),
            "মুছে ফেলার সময়": r.deleted_at,
        }
        for r in records
    ])
    st.dataframe(df, use_container_width=True, hide_index=True)


def settings_page():
    st.header("⚙️ সেটিংস")
    if not is_admin():
        st.caption("লগইন করুন।")
        return
    st.subheader("পাসওয়ার্ড পরিবর্তন")
    password_form()


def main_app():
    members, subs, exps = data()
    st.sidebar.title("🛡️ কালিপুর পাহারাদার")
    st.sidebar.metric("ব্যালেন্স", format_taka(ledger.fund_balance(subs, exps)))

    page = st.sidebar.radio("নেভিগেশন", PAGES, index=PAGES.index(st.session_state.page), format_func=PAGE_LABELS.get)
    if page != st.session_state.page:
        go_to(page)

    if is_admin():
        st.sidebar.caption(f"অ্যাডমিন মোড: {st.session_state.user}")
        if st.sidebar.button("লগআউট"):
            logout()
            st.rerun()
    else:
        st.sidebar.caption("ভিউ অনলি")
        login_box()

    notification_area()

    pages = {
        "Dashboard": dashboard_page,
        "Members": members_page,
        "Collections": collections_page,
        "Defaulters": defaulters_page,
        "Expenses": expenses_page,
        "Reports": reports_page,
        "Trash": trash_page,
        "Settings": settings_page,
    }
    pages[st.session_state.page]()


# --------- App entry ---------

def run():
    init_once()
    init_session()

    if is_admin() and db.is_force_password_change():
        force_change_password_screen()
        return

    # listeners are released when the run ends
    with store.listening(session_listeners()):
        main_app()


if __name__ == "__main__":
    run()
