DASHBOARD_HTML = """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>Mission Control - Emergency Medical Logistics</title>
    <style>
      body { font-family: sans-serif; background: #0a0a0a; color: #eaeaea; max-width: 1100px; margin: 24px auto; padding: 0 12px; }
      h1 { font-style: italic; margin-bottom: 4px; }
      .muted { color: #888; font-size: 12px; letter-spacing: 0.2em; text-transform: uppercase; }
      .grid { display: grid; grid-template-columns: 1fr 1fr; gap: 12px; }
      .card { border: 1px solid #333; border-radius: 16px; padding: 16px; }
      .risk { color: #ff3131; font-weight: bold; }
      .ok { color: #00f5ff; }
      select, button { padding: 8px; margin-top: 8px; }
      .bar { height: 10px; background: #00f5ff; margin: 4px 0; }
      .bar.delay { background: #ff3131; }
      .active { color: #00f5ff; font-weight: bold; }
      pre { background: #111; padding: 12px; border-radius: 8px; overflow: auto; white-space: pre-wrap; }
    </style>
  </head>
  <body>
    <h1>Mission Control</h1>
    <p class="muted">Live routing // <span id="clock"></span> // Swagger: <a href="/docs">/docs</a></p>

    <label>Shipment</label>
    <select id="shipment" onchange="loadAll()"></select>
    <button onclick="refreshConditions()">Refresh conditions</button>

    <div class="grid">
      <div class="card"><h3>Life cost</h3><div id="lifecost">loading</div></div>
      <div class="card"><h3>Route strategy</h3><div id="strategy">loading</div></div>
      <div class="card"><h3>AI advisor</h3><div id="advisor">loading</div></div>
      <div class="card"><h3>Conditions</h3><div id="conditions">loading</div></div>
      <div class="card"><h3>Feature impact</h3><div id="waterfall">loading</div></div>
      <div class="card"><h3>Decision path</h3><div id="tree">loading</div></div>
    </div>

    <script>
      async function api(path, method="GET") {
        const res = await fetch(path, { method, headers: { "x-client-id": clientId() } });
        const body = await res.json();
        if (!body.success) throw new Error(body.error.code + ": " + body.error.message);
        return body.data;
      }

      function clientId() {
        let id = localStorage.getItem("dashboard-client-id");
        if (!id) {
          id = "web-" + Math.random().toString(36).slice(2, 10);
          localStorage.setItem("dashboard-client-id", id);
        }
        return id;
      }

      function pct(value) { return Math.round(value * 100) + "%"; }

      async function loadShipments() {
        const shipments = await api("/v1/registry/shipments");
        const select = document.getElementById("shipment");
        select.innerHTML = shipments.map(s =>
          `<option value="${s.id}">${s.id} - ${s.cargo.description} (${s.status})</option>`
        ).join("");
        const focus = await api("/v1/dispatch");
        select.value = focus.shipment.id;
      }

      async function loadAll() {
        const id = document.getElementById("shipment").value;
        const dispatch = await api("/v1/dispatch?shipment_id=" + encodeURIComponent(id));
        const lc = dispatch.life_cost;
        document.getElementById("lifecost").innerHTML =
          `<div class="${lc.is_high_risk ? "risk" : "ok"}">${lc.score.toFixed(2)} ${lc.is_high_risk ? "HIGH RISK" : "stable"}</div><pre>${lc.formula}</pre>`;
        const rs = dispatch.route_strategy;
        document.getElementById("strategy").innerHTML = `<b>${rs.route_name}</b> (${rs.urgency})<p>${rs.reasoning}</p>`;
        const c = dispatch.conditions;
        document.getElementById("conditions").innerHTML =
          `${c.weather.description}, ${c.weather.temperature_c} C, impact ${pct(c.weather_impact)} (${c.weather.source})<br/>` +
          `Traffic ${pct(c.traffic_congestion)} congestion (${c.traffic.source})<br/>` +
          `Fleet: ${dispatch.fleet.in_transit} in transit, ${dispatch.fleet.pending} pending, ${dispatch.fleet.critical} critical`;

        const advisor = await api("/v1/advisor?shipment_id=" + encodeURIComponent(id));
        document.getElementById("advisor").innerHTML = `<p>${advisor.explanation}</p><span class="muted">${advisor.source}</span>`;

        const audit = await api("/v1/audit?severity=" + dispatch.shipment.severity);
        document.getElementById("waterfall").innerHTML = audit.contributions.map(f =>
          `<div>${f.name} (${f.live_label}): ${f.value > 0 ? "+" : ""}${f.value.toFixed(2)}` +
          `<div class="bar ${f.kind === "delay" ? "delay" : ""}" style="width:${Math.min(100, Math.abs(f.value) * 20)}%"></div></div>`
        ).join("") + `<p><b>${audit.summary.verdict}</b>: ${audit.summary.recommendation} (net ${audit.summary.net_score.toFixed(2)})</p>`;
        document.getElementById("tree").innerHTML =
          audit.active_path.map(step => `<div class="active">${step}</div>`).join("");
      }

      async function refreshConditions() {
        await api("/v1/conditions/refresh", "POST");
        await loadAll();
      }

      function tick() { document.getElementById("clock").textContent = new Date().toLocaleTimeString(); }

      setInterval(tick, 1000);
      tick();
      loadShipments().then(loadAll).catch(err => {
        document.getElementById("advisor").textContent = err.message;
      });
    </script>
  </body>
</html>
"""
