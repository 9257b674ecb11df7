from ts_scaffold import main

raise SystemExit(main())
