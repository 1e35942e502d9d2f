# This config file is located at /etc/chefctl-config.py
# You can change this location by passing `-C/--config` to `chefctl`
# or by setting CHEFCTL_CONFIG.
# Run `chefctl config init` for every option with its description.

# Whether or not chefctl should provide verbose output.
verbose = False

_root = "C:/opscode/chef" if is_windows() else "/opt/chef"

# The chef-client process to use.
import os

if os.path.isdir(_root):
    chef_client = _root + "/bin/chef-client"
elif os.path.isdir(_root + "dk"):
    chef_client = _root + "dk/bin/chef-client"

# Default options to pass to chef-client.
chef_options = [
    "--no-fork",
    "-c", "/etc/chef/client.rb",
    "-z",
]

# If set, ignore the splay and stop pending chefctl processes before
# running. This is intended for interactive runs of chef
# (i.e. started by a human).
immediate = False

# The lock file to use for chefctl.
lock_file = "C:/chef/chefctl.lock" if is_windows() else "/var/lock/subsys/chefctl"

# Directory where per-run chef logs should be placed.
log_dir = "C:/chef/outputs" if is_windows() else "/var/chef/outputs"

# If set, will not copy chef log to stdout.
quiet = False

# The PATH environment entries to use for chef-client.
if is_windows():
    path = ["C:/Windows/System32"]
else:
    path = ["/usr/sbin", "/usr/bin"]

# JSON attributes passed to chef-client with -j by the json-config plugin.
config_json = "/etc/chef/config.json"
config_json_d = "/etc/chef/config.json.d"
