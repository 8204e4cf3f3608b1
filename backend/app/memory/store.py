from app.services.budget_guard import UsageLedger

# Process-wide usage counters: origin -> {"ai": n, "web": n}.
# Nothing here survives a restart.
usage = UsageLedger()
