"""Sampling from /proc, rolling statistics, anomaly and trend detection, alert limiting and periodic loops."""