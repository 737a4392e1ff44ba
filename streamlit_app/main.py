"""
SunCheck - Streamlit Dashboard
Solar installation projects and materials checklists
"""

import streamlit as st
import requests
import pandas as pd
from datetime import date, datetime
import plotly.graph_objects as go

ROOF_TYPES = {
    "ceramic": "Ceramic tile roof",
    "metal": "Metal roof",
    "fiber-cement": "Fiber-cement roof",
    "ground-mount": "Ground mount",
}

STATUSES = {
    "planning": "Planning",
    "in-progress": "In progress",
    "completed": "Completed",
}

CATEGORIES = {
    "safety": "🦺 Safety",
    "electrical-materials": "⚡ Electrical materials",
    "structure": "🏗️ Structure",
}

# Page configuration
st.set_page_config(
    page_title="SunCheck",
    page_icon="☀️",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Sidebar configuration
st.sidebar.title("⚙️ Configuration")
api_url = st.sidebar.text_input("API Base URL", value="http://localhost:8000", key="api_url")


# API helper functions
def make_request(method: str, endpoint: str, data=None, timeout: int = 10):
    """Make request to API"""
    try:
        url = f"{st.session_state.api_url}{endpoint}"
        response = requests.request(method, url, json=data, timeout=timeout)
        response.raise_for_status()
        if "application/json" in response.headers.get("content-type", ""):
            return response.json()
        return response.text
    except requests.exceptions.RequestException as e:
        st.error(f"API Error: {str(e)}")
        return None


def toggle_item(item_id: int):
    """Checkbox callback: push the new completion state of an item."""
    make_request("PATCH", f"/checklist-items/{item_id}", {
        "is_completed": st.session_state[f"item_{item_id}"]
    })


# Main title
st.title("☀️ SunCheck")
st.markdown("**Solar installation projects with automatic materials & safety checklists**")

# Navigation tabs
tab1, tab2, tab3, tab4 = st.tabs(["📊 Dashboard", "📋 Projects", "✅ Checklist", "🔍 Health"])

# ============ DASHBOARD TAB ============
with tab1:
    st.header("Dashboard Overview")

    summary = make_request("GET", "/reports/summary")
    if summary:
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            st.metric("📁 Total Projects", summary.get("total_projects", 0))
        with col2:
            st.metric("✅ Completed", summary.get("completed_projects", 0))
        with col3:
            st.metric("⚡ In Progress", summary.get("in_progress_projects", 0))
        with col4:
            st.metric("🔆 Installed Power", f"{summary.get('total_panel_power_kw', 0):.2f} kW")

        st.divider()

        total_items = summary.get("total_checklist_items", 0)
        done_items = summary.get("completed_checklist_items", 0)
        st.metric(
            "Checklist items done",
            f"{done_items} / {total_items}",
            delta=f"{(done_items / max(1, total_items) * 100):.1f}%"
        )

        st.subheader("Projects by Status")
        status_data = {
            "Planning": summary.get("planning_projects", 0),
            "In progress": summary.get("in_progress_projects", 0),
            "Completed": summary.get("completed_projects", 0),
        }
        status_data = {k: v for k, v in status_data.items() if v > 0}

        if status_data:
            fig = go.Figure(data=[go.Pie(
                labels=list(status_data.keys()),
                values=list(status_data.values()),
                marker=dict(colors=["#ffa15a", "#636efa", "#00cc96"])
            )])
            fig.update_layout(height=400)
            st.plotly_chart(fig, width="stretch")
        else:
            st.info("No projects yet")

# ============ PROJECTS TAB ============
with tab2:
    st.header("Projects")

    col1, col2 = st.columns([3, 1])
    with col2:
        if st.button("🔄 Refresh Projects"):
            st.rerun()

    projects = make_request("GET", "/projects")
    if projects:
        df = pd.DataFrame([
            {
                "ID": p.get("id"),
                "Name": p.get("name"),
                "Panels": p.get("panel_count"),
                "Inverter (kW)": p.get("inverter_power_kw"),
                "Installation": ROOF_TYPES.get(p.get("roof_type"), p.get("roof_type")),
                "Status": STATUSES.get(p.get("status"), p.get("status")),
                "Installer": p.get("installer") or "-",
                "Created": (p.get("created_at") or "")[:10]
            }
            for p in projects
        ])
        st.dataframe(df, width="stretch", hide_index=True)
    else:
        st.info("No projects found")

    st.divider()

    # Create new project form
    st.subheader("➕ Create New Project")
    with st.form("create_project_form", border=True):
        name = st.text_input("Project name", value="Solar Project")
        col1, col2, col3 = st.columns(3)
        with col1:
            panel_count = st.number_input("Panels (550W)", value=6, step=1, min_value=1, max_value=200)
        with col2:
            inverter_power = st.number_input("Inverter power (kW)", value=3.0, step=0.1, min_value=3.0, max_value=100.0)
        with col3:
            roof_type = st.selectbox("Installation type", list(ROOF_TYPES), format_func=ROOF_TYPES.get)

        col1, col2, col3 = st.columns(3)
        with col1:
            inverter_brand = st.text_input("Inverter brand")
        with col2:
            installer = st.text_input("Installer")
        with col3:
            installation_date = st.date_input("Installation date", value=None)

        col1, col2 = st.columns(2)
        with col1:
            address = st.text_input("Address")
        with col2:
            phone = st.text_input("Phone", max_chars=20)

        st.markdown("**Monitoring platform access**")
        col1, col2 = st.columns(2)
        with col1:
            platform_url = st.text_input("Platform URL", max_chars=200)
        with col2:
            platform_login = st.text_input("Platform login", max_chars=100)
        platform_notes = st.text_area("Platform notes")

        submitted = st.form_submit_button("✅ Create Project", width="stretch")
        if submitted:
            payload = {
                "name": name,
                "panel_count": int(panel_count),
                "inverter_power_kw": float(inverter_power),
                "roof_type": roof_type,
            }
            optional = {
                "inverter_brand": inverter_brand,
                "installer": installer,
                "address": address,
                "phone": phone,
                "installation_date": installation_date.isoformat() if installation_date else None,
                "platform_url": platform_url,
                "platform_login": platform_login,
                "platform_notes": platform_notes,
            }
            payload.update({k: v for k, v in optional.items() if v})

            result = make_request("POST", "/projects/", payload)
            if result:
                st.success(f"✅ Project created! ID: {result.get('id')} with {result.get('total_items')} checklist items")
                st.rerun()

# ============ CHECKLIST TAB ============
with tab3:
    st.header("Project Checklist")

    projects = make_request("GET", "/projects") or []
    if not projects:
        st.info("Create a project first")
    else:
        project_id = st.selectbox(
            "Select Project",
            options=[p.get("id") for p in projects],
            format_func=lambda pid: next(
                (f"#{p['id']} {p['name']}" for p in projects if p["id"] == pid), str(pid)
            )
        )
        project = make_request("GET", f"/projects/{project_id}")

        if project:
            col1, col2, col3, col4 = st.columns(4)
            with col1:
                st.metric("Panels", project.get("panel_count"))
            with col2:
                st.metric("Inverter", f"{project.get('inverter_power_kw')} kW")
            with col3:
                st.metric("Strings", project.get("string_configuration"))
            with col4:
                st.metric("Installation", ROOF_TYPES.get(project.get("roof_type"), project.get("roof_type")))

            details = [
                ("Address", project.get("address")),
                ("Phone", project.get("phone")),
                ("Inverter brand", project.get("inverter_brand")),
                ("Installer", project.get("installer")),
                ("Installation date", project.get("installation_date")),
            ]
            st.markdown("  \n".join(f"**{label}:** {value}" for label, value in details if value))

            if project.get("platform_url") or project.get("platform_login") or project.get("platform_notes"):
                with st.expander("🔐 Monitoring platform access"):
                    if project.get("platform_url"):
                        st.markdown(f"**URL:** [{project['platform_url']}]({project['platform_url']})")
                    if project.get("platform_login"):
                        st.markdown(f"**Login:** `{project['platform_login']}`")
                    if project.get("platform_notes"):
                        st.markdown(f"**Notes:** {project['platform_notes']}")

            # Edit
            with st.expander("✏️ Edit project"):
                with st.form(f"edit_project_{project_id}"):
                    edit_name = st.text_input("Project name", value=project.get("name", ""))
                    col1, col2, col3 = st.columns(3)
                    with col1:
                        edit_panels = st.number_input(
                            "Panels (550W)", value=int(project.get("panel_count", 1)),
                            step=1, min_value=1, max_value=200
                        )
                    with col2:
                        edit_power = st.number_input(
                            "Inverter power (kW)", value=float(project.get("inverter_power_kw", 3.0)),
                            step=0.1, min_value=3.0, max_value=100.0
                        )
                    with col3:
                        edit_roof = st.selectbox(
                            "Installation type", list(ROOF_TYPES),
                            index=list(ROOF_TYPES).index(project.get("roof_type")),
                            format_func=ROOF_TYPES.get
                        )

                    col1, col2, col3 = st.columns(3)
                    with col1:
                        edit_brand = st.text_input("Inverter brand", value=project.get("inverter_brand") or "")
                    with col2:
                        edit_installer = st.text_input("Installer", value=project.get("installer") or "")
                    with col3:
                        edit_status = st.selectbox(
                            "Status", list(STATUSES),
                            index=list(STATUSES).index(project.get("status")),
                            format_func=STATUSES.get
                        )

                    col1, col2, col3 = st.columns(3)
                    with col1:
                        edit_address = st.text_input("Address", value=project.get("address") or "")
                    with col2:
                        edit_phone = st.text_input("Phone", value=project.get("phone") or "", max_chars=20)
                    with col3:
                        current_date = project.get("installation_date")
                        edit_date = st.date_input(
                            "Installation date",
                            value=date.fromisoformat(current_date) if current_date else None
                        )

                    col1, col2 = st.columns(2)
                    with col1:
                        edit_platform_url = st.text_input(
                            "Platform URL", value=project.get("platform_url") or "", max_chars=200
                        )
                    with col2:
                        edit_platform_login = st.text_input(
                            "Platform login", value=project.get("platform_login") or "", max_chars=100
                        )
                    edit_platform_notes = st.text_area("Platform notes", value=project.get("platform_notes") or "")

                    st.caption("Changing panels, inverter power or installation type regenerates the checklist.")
                    if st.form_submit_button("💾 Save changes", width="stretch"):
                        updates = {
                            "name": edit_name,
                            "panel_count": int(edit_panels),
                            "inverter_power_kw": float(edit_power),
                            "roof_type": edit_roof,
                            "status": edit_status,
                            "inverter_brand": edit_brand or None,
                            "installer": edit_installer or None,
                            "address": edit_address or None,
                            "phone": edit_phone or None,
                            "installation_date": edit_date.isoformat() if edit_date else None,
                            "platform_url": edit_platform_url or None,
                            "platform_login": edit_platform_login or None,
                            "platform_notes": edit_platform_notes or None,
                        }
                        if make_request("PATCH", f"/projects/{project_id}", updates):
                            st.success("Project updated")
                            st.rerun()

            # Status
            current_status = project.get("status")
            new_status = st.selectbox(
                "Status",
                list(STATUSES),
                index=list(STATUSES).index(current_status),
                format_func=STATUSES.get,
                key=f"status_{project_id}"
            )
            if new_status != current_status:
                if make_request("PATCH", f"/projects/{project_id}/status", {"status": new_status}):
                    st.rerun()

            # Progress
            st.progress(
                project.get("progress_percent", 0) / 100,
                text=f"{project.get('completed_items')} of {project.get('total_items')} items "
                     f"({project.get('progress_percent')}%)"
            )

            st.divider()

            items = project.get("checklist_items", [])
            for category, label in CATEGORIES.items():
                category_items = [i for i in items if i.get("category") == category]
                if not category_items:
                    continue
                st.subheader(label)
                for item in category_items:
                    st.checkbox(
                        item.get("title"),
                        value=item.get("is_completed", False),
                        key=f"item_{item['id']}",
                        help=item.get("description"),
                        on_change=toggle_item,
                        args=(item["id"],)
                    )
                    st.caption(item.get("description"))

            st.divider()

            # Export
            col1, col2 = st.columns(2)
            with col1:
                export = make_request("GET", f"/reports/projects/{project_id}/export")
                if export:
                    st.download_button(
                        "📄 Download checklist (TXT)",
                        data=export,
                        file_name=f"project-{project_id}.txt",
                        mime="text/plain",
                        width="stretch"
                    )
            with col2:
                if items:
                    csv = pd.DataFrame([
                        {
                            "Category": CATEGORIES.get(i.get("category"), i.get("category")),
                            "Item": i.get("title"),
                            "Description": i.get("description"),
                            "Done": "yes" if i.get("is_completed") else "no",
                        }
                        for i in items
                    ]).to_csv(index=False)
                    st.download_button(
                        "📊 Download checklist (CSV)",
                        data=csv,
                        file_name=f"project-{project_id}.csv",
                        mime="text/csv",
                        width="stretch"
                    )

            # AI analysis
            st.subheader("🤖 AI Analysis")
            col1, col2 = st.columns(2)
            with col1:
                if st.button("Analyze project", width="stretch"):
                    with st.spinner("Analyzing..."):
                        analysis = make_request("POST", f"/projects/{project_id}/analyze", timeout=60)
                    if analysis:
                        st.metric("Efficiency score", f"{analysis.get('efficiency_score', 0):.0f}/100")
                        st.markdown("**Recommendations**")
                        for rec in analysis.get("recommendations", []):
                            st.markdown(f"- {rec}")
                        st.markdown("**Installation tips**")
                        for tip in analysis.get("installation_tips", []):
                            st.markdown(f"- {tip}")
                        st.markdown(f"**Cost optimization:** {analysis.get('cost_optimization', '')}")
            with col2:
                if st.button("Generate installation report", width="stretch"):
                    with st.spinner("Writing report..."):
                        result = make_request("POST", f"/projects/{project_id}/report", timeout=120)
                    if result:
                        st.text_area("Report", result.get("report", ""), height=400)

            st.divider()

            # Delete
            with st.expander("🗑️ Delete project"):
                st.warning("This removes the project and its whole checklist.")
                if st.button("Delete permanently", key=f"delete_{project_id}"):
                    if make_request("DELETE", f"/projects/{project_id}"):
                        st.success("Project deleted")
                        st.rerun()

# ============ HEALTH TAB ============
with tab4:
    st.header("API Health & Diagnostics")

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("🏥 API Information")
        health = make_request("GET", "/health/")
        if health:
            st.json(health)

        st.subheader("🔗 Connection Test")
        if st.button("Test Connection"):
            try:
                response = requests.get(f"{st.session_state.api_url}/health/ready", timeout=5)
                if response.status_code == 200:
                    st.success(f"✅ Connected! (Status: {response.status_code})")
                else:
                    st.error(f"❌ Unexpected status: {response.status_code}")
            except requests.exceptions.RequestException as e:
                st.error(f"❌ Connection failed: {str(e)}")

    with col2:
        st.subheader("📈 API Endpoints")
        endpoints = [
            ("GET", "/health/ready", "Readiness check"),
            ("GET", "/projects", "List projects"),
            ("POST", "/projects/", "Create project + checklist"),
            ("GET", "/projects/{id}", "Project with checklist"),
            ("PATCH", "/checklist-items/{id}", "Toggle checklist item"),
            ("POST", "/projects/{id}/analyze", "AI analysis"),
            ("GET", "/reports/summary", "Portfolio summary"),
        ]

        df_endpoints = pd.DataFrame(endpoints, columns=["Method", "Endpoint", "Description"])
        st.dataframe(df_endpoints, width="stretch", hide_index=True)

# Footer
st.divider()
st.markdown(
    f"**SunCheck** | API: {st.session_state.api_url} | "
    f"Last updated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}"
)
