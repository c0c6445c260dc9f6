DEFAULT_CONFIG = {
    # -----------------------------
    # EDCI CALCULATION
    # -----------------------------
    "edci": {
        "doctor_weights": {"l1": 3.0, "l2": 2.0, "l3": 1.0, "l4": 0.5, "l5": 0.2},
        "nurse_weights": {"l1": 1.5, "l2": 1.0, "l3": 1.0, "l4": 0.5, "l5": 0.3},
        "resident_fte_factor": 0.6,
        "blend_weights": {
            "pbr_weight": 0.3,
            "nbr_weight": 0.3,
            "waiting_weight": 0.2,
            "overstay_weight": 0.2,
        },
        "thresholds": {
            "normal": 15.0,
            "warning": 25.0,
        },
        "precision": 2,
        "validate": False,     # opt-in input validation
    },

    # -----------------------------
    # UPSTREAM HOSPITAL DATA API
    # -----------------------------
    # NOTE:
    # - empty base_url / endpoint means synthetic data
    # - timeout in seconds, refresh_interval in minutes
    "api": {
        "base_url": "",
        "endpoint": "/api/OverallDashboard/GetEDCIDashBoard",
        "api_key": "",
        "timeout": 30,
        "retry_count": 3,
        "backoff_seconds": 1.0,
        "refresh_interval": 5,
    },

    # -----------------------------
    # NOTIFICATIONS (DECISION ONLY)
    # -----------------------------
    "notifications": {
        "enabled": True,
        "warning_threshold": 25.0,
        "critical_threshold": 30.0,
        "interval_minutes": 30,
    },

    # -----------------------------
    # USERS / HOSPITAL ALLOW-LIST
    # -----------------------------
    "users": [],

    # -----------------------------
    # EXPORT
    # -----------------------------
    "export": {
        "format": "csv",       # csv | xlsx | pdf
        "enabled": False,      # poller writes a snapshot each cycle
    },

    # -----------------------------
    # OUTPUT CONTROL
    # -----------------------------
    "output_dir": "runs",

    # -----------------------------
    # METADATA (OPTIONAL)
    # -----------------------------
    "metadata": {
        "framework": "EDCI Engine",
    },
}
